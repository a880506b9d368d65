import io
from sqlalchemy.orm import Session
from sqlalchemy import select
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter
from app.models.assignment import Assignment, AssignmentReader
from app.services.reader_history_service import get_current_readers

HEADERS = [
    "ID", "Livre", "Auteur", "Statut", "Lecteur actuel", "E-mail lecteur", "Commande",
    "Réception", "Envoi au lecteur", "Retour à l'ECA", "Notes",
]


def _fmt_date(value) -> str:
    return value.strftime("%d/%m/%Y") if value else ""


def export_assignments_excel(db: Session) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Affectations"

    header_fill = PatternFill(start_color="1C2D42", end_color="1C2D42", fill_type="solid")
    header_font = Font(bold=True, color="F5A623", size=11)
    for col, h in enumerate(HEADERS, 1):
        cell = ws.cell(row=1, column=col, value=h)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center")

    assignments = db.scalars(select(Assignment).order_by(Assignment.id.desc())).all()
    readers = get_current_readers(db, [a.id for a in assignments])
    for row_num, a in enumerate(assignments, 2):
        reader = readers.get(a.id)
        ws.cell(row=row_num, column=1, value=a.id)
        ws.cell(row=row_num, column=2, value=a.catalogue.title if a.catalogue else "")
        ws.cell(row=row_num, column=3, value=a.catalogue.author if a.catalogue else "")
        ws.cell(row=row_num, column=4, value=a.status.name if a.status else "")
        ws.cell(row=row_num, column=5, value=reader.name if reader else "")
        ws.cell(row=row_num, column=6, value=reader.email if reader else "")
        ws.cell(row=row_num, column=7, value=a.order_id)
        ws.cell(row=row_num, column=8, value=_fmt_date(a.reception_date))
        ws.cell(row=row_num, column=9, value=_fmt_date(a.sent_to_reader_date))
        ws.cell(row=row_num, column=10, value=_fmt_date(a.returned_to_eca_date))
        ws.cell(row=row_num, column=11, value=a.notes or "")

    col_widths = [6, 36, 24, 26, 24, 28, 10, 12, 14, 14, 40]
    for i, w in enumerate(col_widths, 1):
        ws.column_dimensions[get_column_letter(i)].width = w
    ws.row_dimensions[1].height = 22
    ws.freeze_panes = "A2"

    # Full reassignment log
    ws2 = wb.create_sheet("Historique lecteurs")
    h2 = ["Affectation", "Livre", "Lecteur", "Assigné le", "Motif"]
    for col, h in enumerate(h2, 1):
        cell = ws2.cell(row=1, column=col, value=h)
        cell.font = Font(bold=True)
    ws2.freeze_panes = "A2"

    entries = db.scalars(
        select(AssignmentReader).order_by(
            AssignmentReader.assignment_id.desc(),
            AssignmentReader.assigned_at.desc(),
            AssignmentReader.id.desc(),
        )
    ).all()
    for row_num, e in enumerate(entries, 2):
        book = e.assignment.catalogue
        ws2.cell(row=row_num, column=1, value=e.assignment_id)
        ws2.cell(row=row_num, column=2, value=book.title if book else "")
        ws2.cell(row=row_num, column=3, value=e.reader.name if e.reader else "")
        ws2.cell(row=row_num, column=4, value=e.assigned_at.strftime("%d/%m/%Y %H:%M"))
        ws2.cell(row=row_num, column=5, value=e.notes or "")

    for i, w in enumerate([12, 36, 24, 18, 40], 1):
        ws2.column_dimensions[get_column_letter(i)].width = w

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()
