"""
Lineage certificates and the deceased-members memorial listing.

Each document is first prepared as plain data (build_certificate,
build_memorial) and then laid out as a PDF with reportlab.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
import logging
import math
from pathlib import Path
import random
import re
from urllib.parse import quote
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from config import Settings
from genealogy import compute_generation, find_ancestors
from models import Member
from store import MemberStore

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "Not Available"
QR_SERVICE_URL = "https://api.qrserver.com/v1/create-qr-code/"
ACCENT = colors.HexColor("#1a5f7a")
MUTED = colors.HexColor("#666666")


# ============================================================================
# Lineage certificate
# ============================================================================


@dataclass(frozen=True)
class Certificate:
    reference: str
    issue_date: str
    name: str
    father: str
    lineage: tuple[str, ...]  # oldest ancestor first, member last
    is_outsider: bool
    qr_payload: str
    qr_url: str


def reference_number(issued: date, serial: int, prefix: str = "NPB") -> str:
    """Certificate number such as NPB/2025/06/01/042."""
    return f"{prefix}/{issued.year}/{issued.month:02d}/{issued.day:02d}/{serial:03d}"


def format_issue_date(issued: date) -> str:
    return f"{issued:%B} {issued.day}, {issued.year}"


def qr_code_url(payload: str, size: int = 150) -> str:
    """URL of a rendered QR image for `payload` (encoded like encodeURIComponent)."""
    data = quote(payload, safe="!*()'")
    return f"{QR_SERVICE_URL}?size={size}x{size}&margin=1&data={data}"


def build_certificate(
    store: MemberStore,
    member: Member,
    issued: date | None = None,
    serial: int | None = None,
    settings: Settings | None = None,
) -> Certificate:
    """
    Prepare the lineage certificate for `member`.

    Linked members take their ancestry from the store. Outsider records are
    not part of the linked structure, so their supplied ancestor names are
    used, or failing that the free-text father name alone.
    """
    settings = settings or Settings()
    issued = issued or date.today()
    if serial is None:
        serial = random.randrange(1000)
    reference = reference_number(issued, serial, settings.reference_prefix)

    if member.is_outsider:
        if member.ancestors:
            elders = list(member.ancestors)
        elif member.father_name:
            elders = [member.father_name]
        else:
            elders = []
        father = member.father_name or (elders[0] if elders else NOT_AVAILABLE)
    else:
        elders = [a.name for a in find_ancestors(store, member)]
        father = elders[0] if elders else NOT_AVAILABLE

    lineage = tuple(reversed(elders)) + (member.name,)
    payload = f"Certificate: {reference}\nName: {member.name}\nFather: {father}"

    return Certificate(
        reference=reference,
        issue_date=format_issue_date(issued),
        name=member.name,
        father=father,
        lineage=lineage,
        is_outsider=member.is_outsider,
        qr_payload=payload,
        qr_url=qr_code_url(payload, settings.qr_size),
    )


def write_certificate_pdf(certificate: Certificate, output_path: Path):
    """Lay out a certificate on a single A4 page."""
    styles = getSampleStyleSheet()
    title = ParagraphStyle("CertTitle", parent=styles["Title"], textColor=ACCENT, fontSize=16)
    meta = ParagraphStyle("CertMeta", parent=styles["Normal"], fontSize=7, textColor=MUTED)
    chain = ParagraphStyle("CertChain", parent=styles["Normal"], alignment=1, fontSize=10)
    current = ParagraphStyle("CertCurrent", parent=chain, fontName="Helvetica-Bold", textColor=ACCENT)

    elements = [
        Paragraph(f"Reference: {escape(certificate.reference)}", meta),
        Paragraph("Valid Until: Permanent", meta),
        Paragraph("Document Type: Vanshaavali Family Lineage Certificate", meta),
        Spacer(1, 12),
        Paragraph("Vanshaavali Or Lineage Certificate", title),
        Spacer(1, 8),
    ]

    rows = [
        ["Certificate Number:", certificate.reference],
        ["Issue Date:", certificate.issue_date],
        ["Name:", certificate.name],
    ]
    if certificate.is_outsider:
        rows.append(["Father's Name:", certificate.father])
        rows.append(["Entry Type:", "Manual Entry / Outsider"])
    info = Table(rows, colWidths=[120, 300])
    info.setStyle(
        TableStyle(
            [
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("TEXTCOLOR", (0, 0), (0, -1), MUTED),
                ("FONTNAME", (1, 0), (1, -1), "Helvetica-Bold"),
                ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor("#f8f8f8")),
            ]
        )
    )
    elements += [info, Spacer(1, 20)]

    *elders, name = certificate.lineage
    for elder in elders:
        elements.append(Paragraph(escape(elder), chain))
        elements.append(Paragraph("|", chain))
    elements.append(Paragraph(escape(name), current))

    elements += [
        Spacer(1, 30),
        Paragraph(
            "This document is for reference in making vanshaavali. It contains verified "
            "lineage data but is not issued by any government body. Valid only if signed "
            "by an authorized official.",
            meta,
        ),
    ]

    doc = SimpleDocTemplate(str(output_path), pagesize=A4, title="Lineage Certificate")
    doc.build(elements)
    logger.info("Certificate %s written to %s", certificate.reference, output_path)


# ============================================================================
# Memorial listing
# ============================================================================


@dataclass(frozen=True)
class MemorialEntry:
    serial_number: int
    name: str
    generation: str


@dataclass(frozen=True)
class Memorial:
    pages: list[list[list[MemorialEntry]]]  # page -> column -> entries
    total_members: int
    unique_generations: int
    year_number: int
    year_text: str
    current_year: int
    start_year: int


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def format_generation(generation: int | None) -> str:
    if generation is None:
        return ""
    return f"{ordinal(generation)} Gen"


def format_memorial_name(name: str) -> str:
    """Wrap a name in the memorial honorifics, dropping any already present."""
    clean = re.sub(r"\b(?:Janab|Marhoom)\b", "", name)
    clean = " ".join(clean.split())
    return f"Janab {clean} Marhoom"


def with_generations(store: MemberStore, members: list[Member]) -> list[Member]:
    """Fill the cached generation field from the store for linked members."""
    filled = []
    for m in members:
        if m.is_outsider and m.generation is not None:
            filled.append(m)
        else:
            filled.append(replace(m, generation=compute_generation(store, m)))
    return filled


def split_into_columns(entries: list, columns: int = 2) -> list[list]:
    size = math.ceil(len(entries) / columns) if entries else 0
    return [entries[i * size : (i + 1) * size] for i in range(columns)]


def build_memorial(
    members: list[Member], today: date | None = None, settings: Settings | None = None
) -> Memorial:
    """
    Prepare the memorial listing of deceased members.

    Members are ordered by cached generation (missing counts as 0) and then
    by name, numbered, and split into pages of two columns.
    """
    settings = settings or Settings()
    today = today or date.today()

    ordered = sorted(
        (m for m in members if m.is_deceased),
        key=lambda m: (
            m.generation if m.generation is not None else 0,
            m.name.casefold(),
            m.name,
        ),
    )
    entries = [
        MemorialEntry(
            serial_number=index,
            name=format_memorial_name(m.name),
            generation=format_generation(m.generation),
        )
        for index, m in enumerate(ordered, start=1)
    ]

    per_page = settings.members_per_page
    pages = [
        split_into_columns(entries[start : start + per_page])
        for start in range(0, len(entries), per_page)
    ]

    year_number = today.year - settings.memorial_start_year + 1

    return Memorial(
        pages=pages,
        total_members=len(ordered),
        unique_generations=len({m.generation for m in ordered}),
        year_number=year_number,
        year_text=ordinal(year_number),
        current_year=today.year,
        start_year=settings.memorial_start_year,
    )


def write_memorial_pdf(memorial: Memorial, output_path: Path):
    """Lay out the memorial listing, one two-column table per page."""
    styles = getSampleStyleSheet()
    title = ParagraphStyle("MemTitle", parent=styles["Title"], textColor=ACCENT)
    small = ParagraphStyle("MemSmall", parent=styles["Normal"], fontSize=7, textColor=MUTED)
    centered = ParagraphStyle("MemCentered", parent=small, alignment=1)

    elements = []
    total_pages = len(memorial.pages)
    for page_index, page in enumerate(memorial.pages):
        if page_index == 0:
            elements += [
                Paragraph(
                    f"{memorial.year_text} Year {memorial.current_year} "
                    f"(Started from {memorial.start_year})",
                    small,
                ),
                Paragraph("ISAAL·E·SAWAB", title),
                Paragraph("List of Deceased Family Members", centered),
                Paragraph(
                    f"{memorial.total_members} Total Members &bull; "
                    f"{memorial.unique_generations} Generations",
                    centered,
                ),
                Spacer(1, 12),
            ]

        left, right = page
        rows = []
        for i in range(len(left)):
            row = []
            for column in (left, right):
                if i < len(column):
                    entry = column[i]
                    row += [str(entry.serial_number), entry.name, entry.generation]
                else:
                    row += ["", "", ""]
            rows.append(row)

        table = Table(rows, colWidths=[22, 180, 45] * 2)
        table.setStyle(
            TableStyle(
                [
                    ("FONTSIZE", (0, 0), (-1, -1), 7),
                    ("TOPPADDING", (0, 0), (-1, -1), 1),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 1),
                    ("TEXTCOLOR", (0, 0), (0, -1), MUTED),
                    ("TEXTCOLOR", (3, 0), (3, -1), MUTED),
                    ("TEXTCOLOR", (2, 0), (2, -1), ACCENT),
                    ("TEXTCOLOR", (5, 0), (5, -1), ACCENT),
                ]
            )
        )
        elements += [
            table,
            Spacer(1, 8),
            Paragraph(f"{page_index + 1}/{total_pages}", centered),
            Paragraph(f"Last Updated: {datetime.now():%Y-%m-%d %H:%M:%S}", centered),
        ]
        if page_index < total_pages - 1:
            elements.append(PageBreak())

    if not elements:
        elements.append(Paragraph("No deceased members recorded.", styles["Normal"]))

    doc = SimpleDocTemplate(str(output_path), pagesize=A4, title="Isaal-e-Sawab")
    doc.build(elements)
    logger.info("Memorial listing (%d members) written to %s", memorial.total_members, output_path)
