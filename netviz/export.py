"""
Word (.docx) report of a session: topology, algorithm, a snapshot of the
canvas and the full action log.
"""

import io
import logging

from docx import Document
from docx.shared import Inches, Pt

logger = logging.getLogger(__name__)


def _snapshot_table(doc, nodes, edges):
    table = doc.add_table(rows=1, cols=3)
    hdr = table.rows[0].cells
    hdr[0].text, hdr[1].text, hdr[2].text = "Node", "X", "Y"
    for n in nodes:
        row = table.add_row().cells
        row[0].text, row[1].text, row[2].text = n.label, f"{n.x:.0f}", f"{n.y:.0f}"

    doc.add_paragraph()
    if not edges:
        doc.add_paragraph("No edges.")
        return
    for e in edges:
        arrow = "→" if e.directed else "—"
        doc.add_paragraph(f"{e.source} {arrow} {e.target}", style="List Bullet")


def build_report(log_lines, topology=None, algorithm=None, nodes=(), edges=(), snapshot_png=None):
    doc = Document()
    doc.add_heading("Network Log Report", level=0)

    p = doc.add_paragraph()
    p.add_run(f"Topology: {topology or 'unknown'}").bold = True
    p = doc.add_paragraph()
    p.add_run(f"Algorithm: {algorithm or 'none'}").bold = True

    doc.add_heading("Canvas Snapshot:", level=2)
    if snapshot_png:
        doc.add_picture(io.BytesIO(snapshot_png), width=Inches(6))
    else:
        _snapshot_table(doc, nodes, edges)

    doc.add_heading("Action Log:", level=2)
    for line in log_lines:
        para = doc.add_paragraph(line)
        para.paragraph_format.space_after = Pt(5)
    return doc


def export_report(stream, log_lines, **kwargs):
    doc = build_report(log_lines, **kwargs)
    doc.save(stream)
    logger.info("report written (%d log lines)", len(log_lines))
    return doc
