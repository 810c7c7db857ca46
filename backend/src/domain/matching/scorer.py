"""Additive relevance scoring between a catalog product and a detected description.

Signals and weights:

    code     product code found inside the detected name           +200
    name     normalized names equal                               +100
             else one name contains the other                      +60
    tokens   each detected-name token found in the product name    +15
    brand    either brand contains the other                       +40
    keyword  keyword found in the product name                     +20
             keyword found in the product description               +5
             keyword equal to a product-name token                 +25

Every applicable signal is summed. The total is unbounded and only meaningful
relative to other products scored against the same description.
"""

from typing import Iterable, List

from domain.catalog.models import DetectedDescription, MatchResult, Product
from domain.text.normalizer import normalize, tokenize

CODE_MATCH_WEIGHT = 200
NAME_EXACT_WEIGHT = 100
NAME_CONTAINS_WEIGHT = 60
TOKEN_MATCH_WEIGHT = 15
BRAND_MATCH_WEIGHT = 40
KEYWORD_IN_NAME_WEIGHT = 20
KEYWORD_IN_DESCRIPTION_WEIGHT = 5
KEYWORD_NAME_TOKEN_WEIGHT = 25


def score(product: Product, detected: DetectedDescription) -> int:
    """Score one product against a detected description.

    Args:
        product: Catalog product
        detected: Description produced by the vision provider (may be empty)

    Returns:
        Non-negative integer score
    """
    p_name = normalize(product.name)
    p_brand = normalize(product.brand)
    p_code = normalize(product.code)

    d_name = normalize(detected.detected_name)
    d_brand = normalize(detected.detected_brand)

    d_name_tokens = tokenize(d_name)
    p_name_tokens = tokenize(p_name)

    total = 0

    if p_code and p_code in d_name:
        total += CODE_MATCH_WEIGHT

    # An empty detected name is a substring of everything; it carries no signal
    if d_name and p_name:
        if p_name == d_name:
            total += NAME_EXACT_WEIGHT
        elif d_name in p_name or p_name in d_name:
            total += NAME_CONTAINS_WEIGHT

    matched_tokens = sum(1 for token in d_name_tokens if token in p_name)
    total += matched_tokens * TOKEN_MATCH_WEIGHT

    if p_brand and d_brand and (d_brand in p_brand or p_brand in d_brand):
        total += BRAND_MATCH_WEIGHT

    p_description = normalize(product.description) if product.description else ""

    for keyword in detected.keywords:
        k = normalize(keyword)
        if not k:
            continue
        if k in p_name:
            total += KEYWORD_IN_NAME_WEIGHT
        if p_description and k in p_description:
            total += KEYWORD_IN_DESCRIPTION_WEIGHT
        if k in p_name_tokens:
            total += KEYWORD_NAME_TOKEN_WEIGHT

    return total


def score_catalog(
    catalog: Iterable[Product],
    detected: DetectedDescription,
) -> List[MatchResult]:
    """Score every product in catalog order."""
    return [MatchResult(product=product, score=score(product, detected)) for product in catalog]
