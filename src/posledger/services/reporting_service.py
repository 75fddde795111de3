from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo

from posledger.config import LedgerSettings
from posledger.domain.models import InventoryRow, TransactionRow


@dataclass(frozen=True)
class DashboardSummary:
    revenue: float
    sales_today: float
    units_on_hand: int
    stock_value: float
    cash_balance: float
    low_stock: list[InventoryRow]
    recent: list[TransactionRow]


class ReportingService:
    def __init__(self, repo, settings: LedgerSettings | None = None):
        self.repo = repo
        self.settings = settings or LedgerSettings()

    def get_report_data(self, report_type: str, store_id: Optional[str] = None) -> dict:
        # aggregation is done by the dashboard / workbook export for now
        return {}

    def dashboard(self, store_id: Optional[str] = None, recent_limit: int = 5) -> DashboardSummary:
        inventory = self.repo.inventory_view(store_id) if store_id else self.repo.all_inventory_view()
        return DashboardSummary(
            revenue=float(self.repo.sales_total(store_id)),
            sales_today=float(self.repo.sales_total(store_id, on_date=date.today().isoformat())),
            units_on_hand=sum(r.quantity for r in inventory),
            stock_value=float(sum(r.stock_value for r in inventory)),
            cash_balance=float(self.repo.cash_balance(store_id)),
            low_stock=[r for r in inventory if r.quantity < self.settings.low_stock_threshold],
            recent=self.repo.transaction_view(store_id)[:recent_limit],
        )

    def export_ledger_excel(self, path: str, store_id: Optional[str] = None) -> None:
        wb = Workbook()

        def money(cell):
            cell.number_format = "#,##0.00"

        def bold_row(ws, r):
            for c in ws[r]:
                c.font = Font(bold=True)

        def set_widths(ws, widths: dict[str, int]):
            for col, w in widths.items():
                ws.column_dimensions[col].width = w

        def add_table(ws, name: str, start_row: int, start_col: int, end_row: int, end_col: int):
            ref = f"{get_column_letter(start_col)}{start_row}:{get_column_letter(end_col)}{end_row}"
            tab = Table(displayName=name, ref=ref)
            tab.tableStyleInfo = TableStyleInfo(
                name="TableStyleMedium9",
                showRowStripes=True,
                showColumnStripes=False,
            )
            ws.add_table(tab)

        summary = self.dashboard(store_id)
        store = self.repo.get_store(store_id) if store_id else None

        # -------- 1) Summary --------
        ws = wb.active
        ws.title = "Summary"
        ws["A1"] = "Summary"
        ws["A1"].font = Font(bold=True, size=14)

        ws["A3"] = "Scope"
        ws["B3"] = store.name if store else (store_id or "All stores")

        rows = [
            ("Revenue", summary.revenue, "money"),
            ("Sales today", summary.sales_today, "money"),
            ("Units on hand", summary.units_on_hand, "int"),
            ("Stock value", summary.stock_value, "money"),
            ("Petty cash balance", summary.cash_balance, "money"),
            ("Low stock items", len(summary.low_stock), "int"),
        ]

        start_row = 5
        for i, (label, val, kind) in enumerate(rows):
            r = start_row + i
            ws[f"A{r}"] = label
            ws[f"B{r}"] = val
            if kind == "money":
                money(ws[f"B{r}"])

        set_widths(ws, {"A": 24, "B": 28})

        # -------- 2) Inventory --------
        ws2 = wb.create_sheet("Inventory")
        ws2.append(["Store", "Product", "Specs", "Qty", "Purchase Price", "Sales Price", "Stock Value"])
        bold_row(ws2, 1)

        inventory = self.repo.inventory_view(store_id) if store_id else self.repo.all_inventory_view()
        for out_row, it in enumerate(inventory, start=2):
            ws2.append([
                it.store_name or (store.name if store else it.store_id),
                it.product_name, it.specs, int(it.quantity),
                float(it.purchase_price), float(it.sales_price), float(it.stock_value),
            ])
            money(ws2[f"E{out_row}"])
            money(ws2[f"F{out_row}"])
            money(ws2[f"G{out_row}"])

        ws2.freeze_panes = "A2"
        set_widths(ws2, {"A": 22, "B": 28, "C": 16, "D": 8, "E": 16, "F": 16, "G": 16})
        if ws2.max_row >= 2:
            add_table(ws2, "InventoryDetail", 1, 1, ws2.max_row, 7)

        # -------- 3) Transactions --------
        ws3 = wb.create_sheet("Transactions")
        ws3.append(["ID", "Date", "Type", "Store", "Product", "Vendor", "Customer", "Qty", "Unit Price", "Total"])
        bold_row(ws3, 1)

        for out_row, t in enumerate(self.repo.transaction_view(store_id), start=2):
            ws3.append([
                t.id, t.date, t.kind, t.store_name, t.product_name, t.vendor_name,
                t.customer_type or "", int(t.quantity), float(t.price), float(t.total),
            ])
            money(ws3[f"I{out_row}"])
            money(ws3[f"J{out_row}"])

        ws3.freeze_panes = "A2"
        set_widths(ws3, {
            "A": 18, "B": 12, "C": 10, "D": 22, "E": 28,
            "F": 24, "G": 12, "H": 6, "I": 14, "J": 16,
        })
        if ws3.max_row >= 2:
            add_table(ws3, "TransactionsDetail", 1, 1, ws3.max_row, 10)

        # -------- 4) Petty Cash --------
        ws4 = wb.create_sheet("Petty Cash")
        ws4.append(["ID", "Date", "Store", "Type", "Amount", "Description", "By"])
        bold_row(ws4, 1)

        for out_row, c in enumerate(self.repo.cash_view(store_id), start=2):
            ws4.append([c.id, c.date, c.store_name, c.kind, float(c.amount), c.description, c.by or "system"])
            money(ws4[f"E{out_row}"])

        ws4.freeze_panes = "A2"
        set_widths(ws4, {"A": 18, "B": 12, "C": 22, "D": 10, "E": 14, "F": 34, "G": 14})
        if ws4.max_row >= 2:
            add_table(ws4, "PettyCashDetail", 1, 1, ws4.max_row, 7)

        wb.save(path)
