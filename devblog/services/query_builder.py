"""
Query Builder - free-text phrase to Elasticsearch query DSL

One multi_match clause per term over title, content and tags
(most_fields: a term found in more fields scores higher), all clauses
OR-ed together in a single bool.should. Scoring is left to the engine.

    build_query(["alpha", "beta"]) ->
    {"bool": {"should": [<multi_match alpha>, <multi_match beta>],
              "minimum_should_match": 1}}

Elasticsearch rewrites a bool query without clauses to match_all, so no
terms yields an explicit match_none instead.
"""
from typing import Any, Dict, List, Sequence

SEARCH_FIELDS = ("title", "content", "tags")
MATCH_TYPE = "most_fields"


def split_terms(raw_phrase: str) -> List[str]:
    """Split a user phrase on whitespace, keeping order"""
    if not raw_phrase:
        return []
    return raw_phrase.split()


def build_term_clause(term: str, fields: Sequence[str] = SEARCH_FIELDS) -> Dict[str, Any]:
    return {
        "multi_match": {
            "query": term,
            "type": MATCH_TYPE,
            "fields": list(fields),
        }
    }


def build_query(terms: Sequence[str], fields: Sequence[str] = SEARCH_FIELDS) -> Dict[str, Any]:
    """Combine one clause per term with a single OR"""
    clauses = [build_term_clause(term, fields) for term in terms]
    if not clauses:
        return {"match_none": {}}

    return {
        "bool": {
            "should": clauses,
            "minimum_should_match": 1,
        }
    }


def build_search_body(terms: Sequence[str], size: int = 20) -> Dict[str, Any]:
    return {
        "query": build_query(terms),
        "size": size,
    }
