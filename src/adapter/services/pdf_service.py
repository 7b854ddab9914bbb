"""ReportLab PDF Generation Service Implementation

Implements bill PDF generation using ReportLab library.
"""

from decimal import Decimal
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.domain.customer import Customer
from src.domain.transaction import Transaction


def format_rupiah(amount) -> str:
    return "Rp " + f"{Decimal(str(amount)):,.0f}".replace(",", ".")


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Renders the bill header, customer block and one row per breakdown entry.
    """

    def generate_bill(
        self,
        bill: Transaction,
        customer: Customer,
        company_name: str,
        company_address: str,
    ) -> bytes:
        """
        Generate a bill PDF

        Args:
            bill: Bill transaction with breakdown snapshot
            customer: Billed customer
            company_name: Company name to display on the bill
            company_address: Company address to display on the bill

        Returns:
            PDF document as bytes
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
        )

        styles = getSampleStyleSheet()
        elements = []

        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=22,
            spaceAfter=10,
            textColor=colors.HexColor("#2C3E50"),
        )
        label_style = ParagraphStyle(
            "LabelStyle",
            parent=styles["Heading2"],
            fontSize=14,
            textColor=colors.HexColor("#E74C3C"),
            spaceAfter=20,
        )
        header_style = ParagraphStyle(
            "HeaderStyle",
            parent=styles["Normal"],
            fontSize=10,
            textColor=colors.HexColor("#7F8C8D"),
        )
        normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontSize=10,
        )
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )

        elements.append(Paragraph(company_name, title_style))
        elements.append(Paragraph(company_address, header_style))
        elements.append(Spacer(1, 10 * mm))
        elements.append(Paragraph("TAGIHAN", label_style))

        bill_info = [
            ["Bill Number:", f"BILL-{bill.id:06d}"],
            ["Description:", bill.description],
            ["Status:", bill.status.value.upper()],
            ["Created:", bill.created_at.strftime("%Y-%m-%d %H:%M:%S UTC")],
            ["Due Date:", bill.due_date.strftime("%Y-%m-%d %H:%M:%S UTC")],
        ]

        info_table = Table(bill_info, colWidths=[40 * mm, 100 * mm])
        info_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#7F8C8D")),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(info_table)
        elements.append(Spacer(1, 10 * mm))

        elements.append(Paragraph("Bill To:", bold_style))
        elements.append(Paragraph(f"{customer.name} ({customer.customer_number})", normal_style))
        if customer.address:
            elements.append(Paragraph(customer.address, normal_style))
        elements.append(Spacer(1, 10 * mm))

        line_data = [["Description", "Quantity", "Unit Price", "Total"]]
        breakdown = bill.breakdown or {}

        package = breakdown.get("package", {})
        package_label = package.get("name", "Package")
        if package.get("note"):
            package_label = f"{package_label} ({package['note']})"
        line_data.append(
            [
                package_label,
                "1",
                format_rupiah(package.get("price", 0)),
                format_rupiah(package.get("price", 0)),
            ]
        )

        for item in breakdown.get("addons", []) + breakdown.get("one_time_items", []):
            line_data.append(
                [
                    item["name"],
                    str(item["quantity"]),
                    format_rupiah(item["price"]),
                    format_rupiah(item["total"]),
                ]
            )

        discount = Decimal(str(breakdown.get("discount", 0)))
        if discount:
            line_data.append(["Discount", "", "", f"- {format_rupiah(discount)}"])

        line_table = Table(
            line_data, colWidths=[80 * mm, 25 * mm, 30 * mm, 35 * mm]
        )
        line_table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2C3E50")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 10),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    # Data rows
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F8F9F9")],
                    ),
                ]
            )
        )
        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        total_table = Table(
            [["", "", "Total:", format_rupiah(bill.amount)]],
            colWidths=[80 * mm, 25 * mm, 30 * mm, 35 * mm],
        )
        total_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (2, 0), (-1, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 11),
                    ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                    ("LINEABOVE", (2, 0), (-1, 0), 1.5, colors.HexColor("#2C3E50")),
                    ("TOPPADDING", (0, 0), (-1, -1), 8),
                ]
            )
        )
        elements.append(total_table)
        elements.append(Spacer(1, 15 * mm))

        elements.append(
            Paragraph(
                "<i>Please pay before the due date to avoid service suspension.</i>",
                ParagraphStyle(
                    "FooterNote",
                    parent=styles["Normal"],
                    fontSize=9,
                    textColor=colors.HexColor("#95A5A6"),
                ),
            )
        )

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
