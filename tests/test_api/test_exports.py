"""Tests de l'export Excel des affectations."""
import io

from openpyxl import load_workbook


def test_excel_export(client, make_assignment, make_user, make_book):
    jean = make_user(name="Jean Dupont")
    marie = make_user(name="Marie Martin")
    a = make_assignment(
        catalogue_id=make_book(title="Germinal", author="Émile Zola")["id"],
        reader_id=jean["id"],
        reception_date="2026-01-10",
    )
    client.post(f"/api/assignments/{a['id']}/readers", json={"reader_id": marie["id"]})

    res = client.get("/api/export/assignments.xlsx")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("application/vnd.openxmlformats")

    wb = load_workbook(io.BytesIO(res.content))
    assert wb.sheetnames == ["Affectations", "Historique lecteurs"]
    ws = wb["Affectations"]
    assert ws.cell(row=1, column=2).value == "Livre"
    assert ws.cell(row=2, column=1).value == a["id"]
    assert ws.cell(row=2, column=2).value == "Germinal"
    assert ws.cell(row=2, column=5).value == "Marie Martin"
    assert ws.cell(row=2, column=8).value == "10/01/2026"
    assert wb["Historique lecteurs"].max_row == 3


def test_excel_export_empty(client):
    res = client.get("/api/export/assignments.xlsx")
    assert res.status_code == 200
    wb = load_workbook(io.BytesIO(res.content))
    assert wb["Affectations"].max_row == 1
