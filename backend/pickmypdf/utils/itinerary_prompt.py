# backend/pickmypdf/utils/itinerary_prompt.py

from typing import Any, Dict, List, Optional


SYSTEM_PROMPT = """
You extract structured travel itinerary data from unstructured content.
Respond with ONE compact JSON object and nothing else: no markdown, no comments.
Only use facts stated in the content. Never invent or infer hotels, prices,
visa rules or activities. When a value is not present, use "" for strings
and [] for arrays, but always include every key of the schema.
""".strip()


SCHEMA_DESCRIPTION = """
{
  "title": "string - A compelling trip title",
  "destination": "string - Countries, cities, or regions",
  "duration": "string - Trip length (e.g., '7 days', '2 weeks')",
  "routing": "string - Travel route description",
  "tags": ["array of strings - descriptive tags"],
  "tripType": "string - One of: Adventure, Relaxation, Cultural, Business, Family, Romantic, Solo Travel, Group Travel, Backpacking, Luxury",
  "hotels": ["array of strings - hotel/accommodation names"],
  "experiences": ["array of strings - key activities and experiences"],
  "practicalInfo": {
    "visa": "string - visa requirements and entry information",
    "currency": "string - currency info and budget guidance",
    "tips": ["array of strings - practical travel tips"]
  },
  "dayWiseItinerary": [
    {"day": number, "title": "string - day title", "content": "string - daily activities with times if available"}
  ],
  "withKids": "string - family travel recommendations",
  "withFamily": "string - multi-generational travel advice",
  "offbeatSuggestions": "string - unique/alternative recommendations"
}
""".strip()


def generate_itinerary_prompt(content: str) -> str:
    return f"""
Extract travel itinerary information from the following content and return it as a JSON object matching this exact schema:

{SCHEMA_DESCRIPTION}

EXTRACTION GUIDELINES:
1. Title: use the title in the content, or a short descriptive one built from the destination
2. Destination: all mentioned countries, cities and regions
3. Duration: any time references (days, weeks)
4. Routing: the travel sequence if mentioned
5. Hotels: accommodation names only, no generic descriptions
6. Experiences: specific activities, tours and attractions
7. Day-wise: one entry per day that the content describes, numbered from 1
8. Family and offbeat sections: only advice the content actually gives

IMPORTANT RULES:
- Return ONLY valid JSON
- Use empty strings "" for missing string fields and [] for missing arrays
- Preserve specific names, places and details from the source

Content to extract from:
{content}
"""


# ---------------------------------------------------------------------------
# BROCHURE SUMMARY
# ---------------------------------------------------------------------------
SUMMARY_SYSTEM_PROMPT = (
    "You are a travel writer specializing in creating compelling trip summaries for luxury "
    "travel brochures. Generate concise, engaging summaries that highlight the unique aspects "
    "of each journey. Do NOT repeat the destination or duration in your summary. Focus on the "
    "unique experiences, highlights, and what makes this trip special. Keep it to 2-3 "
    "sentences, travel-brochure style."
)


def build_summary_prompt(
    routing: Optional[str],
    highlights: Optional[str],
    day_wise: Optional[List[Dict[str, Any]]],
) -> str:
    prompt = (
        "Summarize this travel itinerary into a short 2–3 sentence paragraph suitable for a PDF "
        "brochure. Do NOT repeat the destination or duration in your summary. Focus on the unique "
        "experiences, highlights, and what makes this trip special. Write in an engaging, travel "
        "brochure style.\n\n"
    )

    if routing:
        prompt += f"Routing: {routing}\n"
    if highlights:
        prompt += f"Highlights: {highlights}\n"

    if day_wise:
        prompt += "Itinerary:\n"
        for day in day_wise[:3]:
            content = (day.get("content") or "")[:100] or "Activities planned"
            prompt += f"Day {day.get('day')}: {day.get('title', '')} - {content}\n"
        if len(day_wise) > 3:
            prompt += f"...and {len(day_wise) - 3} more days\n"

    return prompt
