"""
Analysis settings and field mappings of a physical search index.

- "folding": lowercases and ASCII-folds while keeping the original token, so
  "Étoile" and "etoile" both match.
- "folding_ngram": same filters over an edge n-gram tokenizer (2..10) for
  prefix-style partial matching on the ``ngram`` field.
"""
FOLDING_ANALYZER = "folding"
NGRAM_ANALYZER = "folding_ngram"

INDEX_SETTINGS = {
    "analysis": {
        "filter": {
            "folding_preserve": {
                "type": "asciifolding",
                "preserve_original": True,
            },
        },
        "tokenizer": {
            "edge_ngram_tokenizer": {
                "type": "edge_ngram",
                "min_gram": 2,
                "max_gram": 10,
                "token_chars": ["letter", "digit"],
            },
        },
        "analyzer": {
            FOLDING_ANALYZER: {
                "type": "custom",
                "tokenizer": "standard",
                "filter": ["lowercase", "folding_preserve"],
            },
            NGRAM_ANALYZER: {
                "type": "custom",
                "tokenizer": "edge_ngram_tokenizer",
                "filter": ["lowercase", "folding_preserve"],
            },
        },
    },
}

_KEYWORD = {"type": "keyword"}
# Stored in _source, never parsed or searched.
_OPAQUE = {"type": "object", "enabled": False}

MAPPING_PROPERTIES = {
    "type": _KEYWORD,
    "keyword": _KEYWORD,
    "name": {"type": "text", "analyzer": FOLDING_ANALYZER},
    "ngram": {
        "type": "text",
        "analyzer": NGRAM_ANALYZER,
        "search_analyzer": FOLDING_ANALYZER,
    },
    "suggest": {
        "type": "completion",
        "analyzer": FOLDING_ANALYZER,
        "contexts": [
            {"name": "game", "type": "category", "path": "game"},
        ],
    },
    "game": _KEYWORD,
    # Villager facets
    "gender": _KEYWORD,
    "species": _KEYWORD,
    "personality": _KEYWORD,
    "zodiac": _KEYWORD,
    "collab": _KEYWORD,
    # Item facets
    "category": _KEYWORD,
    "orderable": {"type": "boolean"},
    "interiorTheme": _KEYWORD,
    "fashionTheme": _KEYWORD,
    "set": _KEYWORD,
    # Payload
    "url": _OPAQUE,
    "image": _OPAQUE,
    "variations": _OPAQUE,
    "variationImages": _OPAQUE,
}
