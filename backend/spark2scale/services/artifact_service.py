"""
Placeholder report rendering for generated stage artifacts.
Analysis content is mocked; no model or external API is called.
"""
import hashlib

from fpdf import FPDF
from fpdf.enums import XPos, YPos

MOCK_SECTIONS = {
    "evaluation": [
        "Market Viability",
        "Team Strength",
        "Financial Health",
        "Product Readiness",
    ],
    "market research": [
        "Market Size",
        "Competition",
        "Customer Demand",
        "Regulatory Climate",
    ],
    "recommendation": [
        "Go-to-Market",
        "Fundraising Readiness",
        "Product Focus",
    ],
}


def _latin1(text: str) -> str:
    """Encode to latin-1, replacing characters the built-in fpdf fonts cannot render."""
    return text.encode("latin-1", errors="replace").decode("latin-1")


def mock_scores(startup_id: str, artifact_type: str, version: int) -> list[tuple[str, int]]:
    """Stable pseudo-scores so a given (startup, type, version) always renders the same report."""
    sections = MOCK_SECTIONS.get(artifact_type.lower(), ["Overview"])
    scores = []
    for name in sections:
        digest = hashlib.sha256(f"{startup_id}:{artifact_type}:{version}:{name}".encode()).digest()
        scores.append((name, 60 + digest[0] % 40))
    return scores


def generate_artifact_pdf(
    startup_id: str,
    startup_name: str,
    artifact_type: str,
    version: int,
    generated_at: str,
    idea_description: str | None = None,
    region: str | None = None,
    category: str | None = None,
) -> bytes:
    """Render a placeholder PDF report for a generated stage artifact."""
    pdf = FPDF()
    pdf.set_margins(20, 20, 20)
    pdf.add_page()

    # Title
    pdf.set_font("Helvetica", "B", 18)
    pdf.multi_cell(0, 10, _latin1(f"{artifact_type} Report"), align="L")
    pdf.ln(2)

    # Metadata
    pdf.set_font("Helvetica", "", 11)
    pdf.set_text_color(80, 80, 80)
    pdf.cell(0, 7, _latin1(f"Startup: {startup_name}"), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.cell(0, 7, _latin1(f"Version: {version} (AI generated)"), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.cell(0, 7, _latin1(f"Generated: {generated_at}"), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    if region:
        pdf.cell(0, 7, _latin1(f"Region: {region}"), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    if category:
        pdf.cell(0, 7, _latin1(f"Category: {category}"), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    # Divider
    pdf.ln(3)
    pdf.set_draw_color(200, 200, 200)
    pdf.line(20, pdf.get_y(), 190, pdf.get_y())
    pdf.ln(5)

    pdf.set_text_color(0, 0, 0)
    if idea_description:
        pdf.set_font("Helvetica", "B", 12)
        pdf.cell(0, 8, "Idea", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "", 10)
        pdf.multi_cell(0, 5, _latin1(idea_description[:5000]))
        pdf.ln(4)

    scores = mock_scores(startup_id, artifact_type, version)
    pdf.set_font("Helvetica", "B", 12)
    overall = round(sum(s for _, s in scores) / len(scores))
    pdf.cell(0, 8, f"Overall score: {overall}/100", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", "", 10)
    for name, score in scores:
        pdf.cell(0, 6, _latin1(f"{name}: {score}/100"), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    return bytes(pdf.output())
