import io
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from gourmet.domain.ShoppingList import ShoppingList
from gourmet.utilities.constants import MISSING_INGREDIENTS_TITLE, PANTRY_SECTION_TITLE, SHOPPING_LIST_TITLE


def _rows(entries):
    rows = [["Menge", "Zutat", "Für"]]
    for e in entries:
        ing = e.ingredient
        amount = " ".join(p for p in (ing.amount, ing.unit) if p)
        used_in = ", ".join(s["dishName"] for s in e.sources)
        rows.append([amount, ing.name, used_in])
    return rows


def _table(entries, header_color: str) -> Table:
    table = Table(_rows(entries), repeatRows=1, colWidths=[90, 170, 250])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor(header_color)),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (0,-1), "RIGHT"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 11),
        ("BOTTOMPADDING", (0,0), (-1,0), 8),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))
    return table


def generate_pdf_for_shopping_list(shopping: ShoppingList, title: str, include_pantry: bool = True) -> bytes:
    """Render the shopping list (and optionally the pantry group) as an A4 PDF."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=30, leftMargin=30, topMargin=30, bottomMargin=30,
        title=f"{SHOPPING_LIST_TITLE} {title}",
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(escape(f"{SHOPPING_LIST_TITLE} für {title}"), styles["Title"]),
        Spacer(1, 12),
    ]
    if shopping.shopping_list:
        elements.append(_table(shopping.shopping_list, "#0F766E"))
    else:
        elements.append(Paragraph("Keine Zutaten geplant.", styles["Normal"]))

    if include_pantry and shopping.pantry_list:
        elements.append(Spacer(1, 18))
        elements.append(Paragraph(escape(PANTRY_SECTION_TITLE), styles["Heading2"]))
        elements.append(_table(shopping.pantry_list, "#64748B"))

    if shopping.dishes_without_ingredients:
        elements.append(Spacer(1, 18))
        elements.append(Paragraph(escape(MISSING_INGREDIENTS_TITLE), styles["Heading2"]))
        for name in shopping.dishes_without_ingredients:
            elements.append(Paragraph(escape(f"- {name}"), styles["Normal"]))

    doc.build(elements)
    return buf.getvalue()
