# backend/pickmypdf/utils/hotel_policy.py

import random
from typing import Any, Dict, List, Optional

from pickmypdf.core.logger import logger


LUXURY_BRANDS = ("hyatt", "ritz", "four seasons", "mandarin", "peninsula")

# (keywords, phrase) checked in order, first hit wins
DESTINATION_PHRASES = [
    (("singapore",), ["Prime Orchard Road location", "Near shopping district"]),
    (("tokyo", "japan"), ["Excellent Japanese hospitality"]),
    (("bangkok", "thailand"), ["Central Bangkok location"]),
    (("hong kong",), ["Heart of Hong Kong"]),
    (("paris",), ["Perfect Parisian location"]),
    (("london",), ["Prime London location"]),
    (("rome", "italy"), ["Historic Italian setting"]),
    (("new york", "manhattan"), ["Central Manhattan location"]),
]

NAME_PHRASES = [
    (("resort", "villa"), "Resort amenities"),
    (("boutique",), "Unique boutique experience"),
    (("business", "executive"), "Business-friendly facilities"),
]

FALLBACK_PHRASES = [
    "Comfortable accommodation",
    "Good location",
    "Friendly staff",
    "Clean rooms",
    "Value for money",
    "Modern facilities",
    "Convenient transport links",
    "Helpful concierge",
    "Well-maintained property",
    "Popular neighborhood",
    "Efficient check-in",
    "Professional service",
    "Peaceful atmosphere",
    "Central location",
    "Good amenities",
]


def _norm(text: Optional[str]) -> str:
    return (text or "").strip().lower()


def is_luxury_hotel(hotel_name: str) -> bool:
    name = _norm(hotel_name)
    return any(brand in name for brand in LUXURY_BRANDS)


# -------------------------------------------------------
# MATCH POLICY
# -------------------------------------------------------
def name_matches(query_name: str, returned_name: Optional[str]) -> bool:
    """
    Accept a provider result only when one name contains the other.

    Crude on purpose: "Marina Bay Sands" matches "Marina Bay Sands Singapore",
    but "Hilton Paris Opera" vs "Hotel Hilton Opera Paris" is rejected.
    """
    query = _norm(query_name)
    returned = _norm(returned_name)
    if not query or not returned:
        return False
    return query in returned or returned in query


# -------------------------------------------------------
# PHRASE SYNTHESIS
# -------------------------------------------------------
def generate_smart_phrases(rating: float, hotel_name: str, destination: Optional[str] = None) -> List[str]:
    phrases: List[str] = []
    luxury = is_luxury_hotel(hotel_name)

    if luxury:
        if rating >= 4.5:
            phrases += ["Exceptional luxury experience", "World-class service"]
        else:
            phrases += ["Luxury amenities", "Premium service"]
    elif rating >= 4.8:
        phrases += ["Exceptional experience", "Outstanding service"]
    elif rating >= 4.5:
        phrases += ["Excellent choice", "Superior amenities"]
    elif rating >= 4.0:
        phrases += ["Great value", "Comfortable stay"]
    else:
        phrases += ["Good accommodation", "Pleasant stay"]

    dest = _norm(destination)
    if dest:
        for keywords, dest_phrases in DESTINATION_PHRASES:
            if any(k in dest for k in keywords):
                phrases += dest_phrases
                break
        else:
            phrases.append("Convenient location")

    name = _norm(hotel_name)
    for keywords, phrase in NAME_PHRASES:
        if any(k in name for k in keywords):
            phrases.append(phrase)
            break

    unique = list(dict.fromkeys(phrases))
    return unique[:3 if luxury else 2]


# -------------------------------------------------------
# SYNTHESIZED FALLBACK
# -------------------------------------------------------
def generate_fallback_hotel(
    hotel_name: str,
    destination: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    rng = rng or random.Random()

    city = destination
    if not city or city == "Unknown":
        words = hotel_name.split()
        city = words[-1] if words else "Unknown"

    return {
        "name": hotel_name,
        "city": city,
        "rating": round(rng.uniform(3.5, 5.0), 1),
        "phrases": rng.sample(FALLBACK_PHRASES, rng.randint(2, 3)),
        "fetchedFromAPI": False,
    }


# -------------------------------------------------------
# SAME-CITY DEDUPE
# -------------------------------------------------------
def merge_hotel(hotels: List[Dict[str, Any]], new_hotel: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Insert new_hotel keeping at most one hotel per city.

    The higher rating wins; on a tie the hotel already in the list stays.
    Hotels without a city never conflict. Returns a new list.
    """
    city = _norm(new_hotel.get("city"))
    if not city:
        return hotels + [new_hotel]

    for i, existing in enumerate(hotels):
        if _norm(existing.get("city")) != city:
            continue

        if (new_hotel.get("rating") or 0) > (existing.get("rating") or 0):
            logger.info(
                f"Replacing '{existing.get('name')}' with higher-rated "
                f"'{new_hotel.get('name')}' in {new_hotel.get('city')}"
            )
            return hotels[:i] + [new_hotel] + hotels[i + 1:]

        logger.info(
            f"Discarding '{new_hotel.get('name')}': '{existing.get('name')}' "
            f"already covers {existing.get('city')} with an equal or better rating"
        )
        return list(hotels)

    return hotels + [new_hotel]
