# backend/pickmypdf/templates/pdf_template.py

from datetime import date
from html import escape
from typing import Optional

from pickmypdf.models.form_models import ItineraryFormData
from pickmypdf.models.preview_models import PreviewImages
from pickmypdf.services.image_service import placeholder_url


MAX_HOTELS = 3
MAX_EXPERIENCES = 4
MAX_DAYS = 4
MAX_GALLERY = 6
MAX_TIPS = 3
DAY_CONTENT_CHARS = 120

DEFAULT_TAGS = ["Adventure", "Cultural", "Photography", "Foodie"]
DEFAULT_COST = "1,42,000 / person"


def _e(value) -> str:
    return escape(str(value)) if value else ""


def _pick(images, index, fallback):
    if index < len(images) and images[index]:
        return images[index]
    return fallback


def _section(title: str, color: str, body: str) -> str:
    return f"""
    <section class="section">
      <h3 class="section-title"><span class="bar" style="background:{color}"></span>{title}</h3>
      {body}
    </section>"""


def _more(count: int, label: str, css: str = "more") -> str:
    return f'<div class="{css}">+ {count} {label}</div>'


# -------------------------------------------------------
# SECTIONS
# -------------------------------------------------------
def _cover(data: ItineraryFormData, images: PreviewImages) -> str:
    title = _e(data.title) or "Your Travel Itinerary"
    background = data.main_image or images.main
    if not background and data.destination:
        background = placeholder_url("main", 0, 800, 400)

    bg_html = (
        f'<img class="cover-bg" src="{_e(background)}" alt="Header background">'
        '<div class="cover-shade"></div>'
        if background else '<div class="cover-plain"></div>'
    )

    meta = ""
    if data.destination:
        meta += f'<span class="meta">&#x1F4CD; {_e(data.destination)}</span>'
    if data.duration:
        meta += f'<span class="meta">&#x1F4C5; {_e(data.duration)}</span>'

    tags = data.tags or DEFAULT_TAGS
    tags_html = "".join(f'<span class="tag">{_e(t)}</span>' for t in tags)

    return f"""
    <header class="cover">
      {bg_html}
      <div class="cover-body">
        <div class="logo">PickMyPDF</div>
        <h1>{title}</h1>
        <div class="cover-meta">{meta}</div>
        <div class="cost">&#8377;{_e(data.cost_in_inr) or DEFAULT_COST}</div>
        <div class="tags">{tags_html}</div>
      </div>
    </header>"""


def _overview(data: ItineraryFormData) -> str:
    rows = [
        ("Destination", data.destination),
        ("Duration", data.duration),
        ("Routing", data.routing),
        ("Trip Type", data.trip_type),
    ]
    body = "".join(
        f'<div class="row"><strong>{label}:</strong> {_e(value)}</div>'
        for label, value in rows if value
    )
    if not body and not data.tags:
        body = '<div class="hint">Complete the overview section to see your trip details here</div>'
    return _section("Overview", "#2563eb", f'<div class="indent">{body}</div>')


def _hotels(data: ItineraryFormData, images: PreviewImages) -> str:
    if not data.hotels:
        return ""
    cards = ""
    for i, hotel in enumerate(data.hotels[:MAX_HOTELS]):
        src = _pick(images.hotels, i, placeholder_url("hotel", i, 400, 150))
        cards += f"""
        <div class="card">
          <div class="card-img"><img src="{_e(src)}" alt="{_e(hotel.name)}"></div>
          <div class="card-title">{_e(hotel.name)}</div>
          <div class="card-sub">Premium accommodation</div>
        </div>"""
    if len(data.hotels) > MAX_HOTELS:
        cards += _more(len(data.hotels) - MAX_HOTELS, "more accommodations included")
    return _section("Accommodations", "#16a34a", f'<div class="indent">{cards}</div>')


def _experiences(data: ItineraryFormData, images: PreviewImages) -> str:
    if not data.experiences:
        return ""
    stars = "&#9733;" * 5
    items = ""
    for i, exp in enumerate(data.experiences[:MAX_EXPERIENCES]):
        src = _pick(images.experiences, i, placeholder_url("experience", i, 120, 120))
        items += f"""
        <div class="exp">
          <div class="thumb"><img src="{_e(src)}" alt="{_e(exp.name)}"></div>
          <div>
            <div class="card-title">{_e(exp.name)}</div>
            <div class="stars">{stars} <span>(4.8/5)</span></div>
            <div class="card-sub">Unforgettable experience awaits</div>
          </div>
        </div>"""
    if len(data.experiences) > MAX_EXPERIENCES:
        items += _more(len(data.experiences) - MAX_EXPERIENCES, "more experiences included")
    return _section("Experiences &amp; Activities", "#ea580c", f'<div class="indent">{items}</div>')


def _days(data: ItineraryFormData, images: PreviewImages) -> str:
    if not data.day_wise_itinerary:
        return ""
    shown = data.day_wise_itinerary[:MAX_DAYS]
    items = ""
    for i, day in enumerate(shown):
        src = _pick(images.days, i, placeholder_url("day", i, 500, 200))
        content = day.content
        if len(content) > DAY_CONTENT_CHARS:
            content = content[:DAY_CONTENT_CHARS] + "..."
        connector = '<div class="connector"></div>' if i < len(shown) - 1 else ""
        items += f"""
        <div class="day">
          <div class="day-rail"><div class="day-num">{day.day}</div>{connector}</div>
          <div class="day-body">
            <div class="card-title">Day {day.day}: {_e(day.title)}</div>
            <div class="day-img"><img src="{_e(src)}" alt="Day {day.day}"></div>
            <div class="day-text">{_e(content)}</div>
          </div>
        </div>"""
    if len(data.day_wise_itinerary) > MAX_DAYS:
        items += _more(len(data.day_wise_itinerary) - MAX_DAYS,
                       "more days in your complete itinerary", "more more-days")
    return _section("Daily Itinerary", "#9333ea", f'<div class="indent">{items}</div>')


def _gallery(data: ItineraryFormData) -> str:
    gallery = data.destination_gallery or []
    if not gallery and not data.destination:
        return ""

    tiles = ""
    if gallery:
        for i, item in enumerate(gallery[:MAX_GALLERY]):
            src = item.image or placeholder_url("city", i, 300, 200)
            tiles += f"""
            <div class="tile"><img src="{_e(src)}" alt="{_e(item.name)}">
              <div class="tile-label">{_e(item.name)} <span class="badge badge-{item.type}">{item.type}</span></div>
            </div>"""
    else:
        for i in range(MAX_GALLERY):
            src = placeholder_url("city", i, 300, 200)
            tiles += f"""
            <div class="tile"><img src="{src}" alt="{_e(data.destination)} highlight {i + 1}">
              <div class="tile-label">{_e(data.destination)}</div>
            </div>"""

    body = f'<div class="grid">{tiles}</div>'
    if len(gallery) > MAX_GALLERY:
        body += _more(len(gallery) - MAX_GALLERY, "more gallery items")
    return _section("Destination Gallery", "#0d9488", body)


def _practical(data: ItineraryFormData) -> str:
    info = data.practical_info
    if not (info.visa or info.currency or info.tips):
        return ""
    body = ""
    if info.visa:
        body += f'<div class="box box-blue"><strong>Visa Requirements:</strong><div>{_e(info.visa)}</div></div>'
    if info.currency:
        body += f'<div class="box box-green"><strong>Currency:</strong><div>{_e(info.currency)}</div></div>'
    if info.tips:
        tips = "".join(f"<li>{_e(t)}</li>" for t in info.tips[:MAX_TIPS])
        body += f'<div class="box box-amber"><strong>Travel Tips:</strong><ul>{tips}</ul></div>'
    return _section("Practical Information", "#2563eb", f'<div class="indent">{body}</div>')


def _special(data: ItineraryFormData) -> str:
    blocks = [
        (data.with_kids, "box-blue", "Family with Kids",
         "Special activities and recommendations for families traveling with children"),
        (data.with_family, "box-red", "Family-Friendly Options",
         "Carefully curated family-friendly activities and dining options"),
        (data.offbeat_suggestions, "box-green", "Offbeat Discoveries",
         "Hidden gems and unique experiences off the beaten path"),
    ]
    body = "".join(
        f'<div class="box {css}"><strong>{title}</strong><div>{text}</div></div>'
        for value, css, title, text in blocks if value
    )
    if not body:
        return ""
    return _section("Special Recommendations", "#4f46e5", f'<div class="indent">{body}</div>')


# -------------------------------------------------------
# PUBLIC
# -------------------------------------------------------
def render_itinerary(data: ItineraryFormData, images: PreviewImages, generated_on: Optional[date] = None) -> str:
    """Markup of the mobile brochure, mirroring the live preview."""
    generated_on = generated_on or date.today()

    empty_state = ""
    if data.is_empty():
        empty_state = """
        <div class="empty">
          <p class="empty-title">Your PDF preview will appear here</p>
          <p>Start filling the form to see your beautiful travel itinerary come to life</p>
        </div>"""

    sections = "".join([
        _overview(data),
        _hotels(data, images),
        _experiences(data, images),
        _days(data, images),
        _gallery(data),
        _practical(data),
        _special(data),
        empty_state,
    ])

    return f"""
<div class="page">
  {_cover(data, images)}
  <main class="content">{sections}
  </main>
  <footer class="footer">
    <span>&#9679; Generated by PickMyPDF</span>
    <span>{generated_on.strftime("%B %d, %Y").replace(" 0", " ")}</span>
  </footer>
</div>"""


def build_html_document(component_html: str, title: str, width: int = 420) -> str:
    """Wrap the markup in a full document that never breaks across pages."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{_e(title) or "Travel Itinerary"}</title>
<style>
  @import url('https://fonts.googleapis.com/css2?family=Manrope:wght@300;400;500;600;700&display=swap');
  html, body {{ height: auto !important; min-height: auto !important; }}
  body {{
    font-family: 'Manrope', sans-serif; width: {width}px; margin: 0; padding: 0;
    overflow-x: hidden; color: #111827; background: #fff;
    -webkit-print-color-adjust: exact; print-color-adjust: exact;
  }}
  * {{
    box-sizing: border-box;
    page-break-inside: avoid !important; break-inside: avoid !important;
    page-break-before: avoid !important; page-break-after: avoid !important;
    break-before: avoid !important; break-after: avoid !important;
  }}
  img {{ max-width: 100%; display: block; width: 100%; height: 100%; object-fit: cover; }}
  .cover {{ position: relative; min-height: 320px; color: #fff; overflow: hidden; }}
  .cover-bg {{ position: absolute; inset: 0; }}
  .cover-shade {{ position: absolute; inset: 0; background: linear-gradient(135deg, rgba(30,58,138,.78), rgba(30,64,175,.7)); }}
  .cover-plain {{ position: absolute; inset: 0; background: linear-gradient(135deg, #2563eb, #1e40af); }}
  .cover-body {{ position: relative; text-align: center; padding: 72px 24px 36px; }}
  .logo {{ font-weight: 700; letter-spacing: .05em; margin-bottom: 48px; }}
  .cover h1 {{ font-size: 1.875rem; line-height: 1.25; margin: 0 0 24px; }}
  .cover-meta .meta {{ margin: 0 12px; font-weight: 500; }}
  .cost {{ display: inline-block; margin: 24px 0; padding: 8px 16px; border-radius: 999px; background: rgba(255,255,255,.25); font-weight: 600; }}
  .tag {{ display: inline-block; margin: 4px; padding: 4px 12px; border-radius: 999px; background: rgba(255,255,255,.25); font-size: .875rem; }}
  .content {{ padding: 24px; }}
  .section {{ margin-bottom: 32px; }}
  .section-title {{ display: flex; align-items: center; gap: 12px; font-size: 1.125rem; padding-bottom: 8px; border-bottom: 1px solid #e5e7eb; color: #1f2937; }}
  .bar {{ width: 4px; height: 24px; border-radius: 2px; display: inline-block; }}
  .indent {{ padding-left: 16px; }}
  .row {{ color: #374151; line-height: 1.625; margin-bottom: 8px; }}
  .hint {{ color: #6b7280; font-style: italic; }}
  .card {{ background: #f9fafb; border: 1px solid #e5e7eb; border-radius: 12px; padding: 16px; margin-bottom: 16px; }}
  .card-img {{ height: 96px; border-radius: 8px; overflow: hidden; margin-bottom: 12px; background: #e5e7eb; }}
  .card-title {{ font-weight: 500; color: #111827; margin-bottom: 4px; }}
  .card-sub {{ font-size: .875rem; color: #4b5563; }}
  .exp {{ display: flex; gap: 16px; border: 1px solid #e5e7eb; border-radius: 8px; padding: 16px; margin-bottom: 16px; }}
  .thumb {{ width: 64px; height: 64px; flex-shrink: 0; border-radius: 8px; overflow: hidden; }}
  .stars {{ color: #facc15; font-size: .75rem; margin-bottom: 8px; }}
  .stars span {{ color: #4b5563; }}
  .day {{ display: flex; gap: 16px; }}
  .day-rail {{ display: flex; flex-direction: column; align-items: center; }}
  .day-num {{ width: 32px; height: 32px; border-radius: 50%; background: #9333ea; color: #fff; display: flex; align-items: center; justify-content: center; font-weight: 700; font-size: .875rem; }}
  .connector {{ width: 2px; height: 80px; background: #e9d5ff; margin-top: 8px; }}
  .day-body {{ flex: 1; padding-bottom: 24px; }}
  .day-img {{ height: 128px; border-radius: 8px; overflow: hidden; margin: 8px 0 12px; }}
  .day-text {{ font-size: .875rem; color: #374151; line-height: 1.625; }}
  .more {{ font-size: .875rem; color: #6b7280; font-style: italic; padding-left: 16px; }}
  .more-days {{ padding-left: 48px; }}
  .grid {{ display: grid; grid-template-columns: repeat(3, 1fr); gap: 12px; padding-left: 16px; }}
  .tile {{ position: relative; height: 96px; border-radius: 8px; overflow: hidden; }}
  .tile-label {{ position: absolute; bottom: 0; left: 0; right: 0; padding: 8px; color: #fff; font-size: .75rem; background: linear-gradient(to top, rgba(0,0,0,.7), transparent); }}
  .badge {{ padding: 1px 6px; border-radius: 999px; }}
  .badge-city {{ background: rgba(59,130,246,.9); }}
  .badge-activity {{ background: rgba(34,197,94,.9); }}
  .badge-landmark {{ background: rgba(168,85,247,.9); }}
  .box {{ border-radius: 8px; padding: 12px; margin-bottom: 12px; font-size: .875rem; }}
  .box-blue {{ background: #eff6ff; border: 1px solid #bfdbfe; color: #1e40af; }}
  .box-green {{ background: #f0fdf4; border: 1px solid #bbf7d0; color: #166534; }}
  .box-amber {{ background: #fffbeb; border: 1px solid #fde68a; color: #92400e; }}
  .box-red {{ background: #fef2f2; border: 1px solid #fecaca; color: #991b1b; }}
  .empty {{ text-align: center; padding: 48px 0; color: #6b7280; }}
  .empty-title {{ font-size: 1.125rem; font-weight: 500; }}
  .footer {{ display: flex; justify-content: space-between; background: #f3f4f6; border-top: 1px solid #e5e7eb; padding: 16px 24px; font-size: .875rem; color: #4b5563; }}
</style>
</head>
<body>
{component_html}
</body>
</html>"""
