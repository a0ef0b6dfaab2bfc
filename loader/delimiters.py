"""
loader.delimiters - The cell mini-grammar.

A single cell can carry several values or several associations:

    size:S,M;colour:red|size:L        two variant specs (association list),
                                      the first with two facets, the first
                                      facet holding a value list
    Clothing>Shirts>Casual            a taxon chain
    material:cotton|washable          two properties, one without a value

Every function is pure: input strings are never modified, tokens come
back stripped, and empty tokens are dropped.
"""

from __future__ import annotations

from typing import Optional

import config


def _split(cell: Optional[str], delim: str) -> list[str]:
    if cell is None:
        return []
    return [tok.strip() for tok in str(cell).split(delim) if tok.strip()]


def split_values(cell: Optional[str], delim: Optional[str] = None) -> list[str]:
    """'a,b,c' → ['a', 'b', 'c']"""
    return _split(cell, delim or config.MULTI_VALUE_DELIM)


def split_associations(cell: Optional[str], delim: Optional[str] = None) -> list[str]:
    """'size:S|size:M' → ['size:S', 'size:M']"""
    return _split(cell, delim or config.MULTI_ASSOC_DELIM)


def split_facets(cell: Optional[str], delim: Optional[str] = None) -> list[str]:
    """'mime_type:jpeg;print_type:black_white' → ['mime_type:jpeg', 'print_type:black_white']"""
    return _split(cell, delim or config.MULTI_FACET_DELIM)


def split_chain(chain: Optional[str], delim: Optional[str] = None) -> list[str]:
    """'Clothing > Shirts>Casual' → ['Clothing', 'Shirts', 'Casual']"""
    return _split(chain, delim or config.TAXON_CHAIN_DELIM)


def split_name_value(
    token: Optional[str], delim: Optional[str] = None,
) -> tuple[str, Optional[str]]:
    """
    'name:value' → ('name', 'value');  'name' → ('name', None).

    Only the first delimiter splits, so values may themselves contain it.
    A blank value comes back as None.
    """
    if token is None:
        return "", None
    name, sep, value = str(token).partition(delim or config.NAME_VALUE_DELIM)
    value = value.strip()
    return name.strip(), (value if sep and value else None)


def humanize(name: str) -> str:
    """'print_type' → 'Print type' (presentation text for created records)."""
    text = name.replace("_", " ").strip()
    return text[:1].upper() + text[1:]
