from collections import defaultdict
from datetime import date, datetime
from io import BytesIO
from typing import Any, Callable, Dict, List, Optional, Tuple
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException
from pydantic import ValidationError

from api.auth.actor import Actor
from api.configurations.config import current_date
from api.schemas.sale import InstallmentInputSchema, SaleCreateSchema
from api.services.abstract_service import AbstractService
from api.services.consultant import ConsultantService
from api.services.sale import SaleService
from common.billing.installment_schedule import resolve_status
from common.billing.money import round_money, to_decimal
from common.billing.quota_ledger import quota_values
from common.exceptions import ApiError, InvalidArgument
from common.repositories.commissions.sale import SaleRepository

SALES_SHEET = "Vendas"
INSTALLMENTS_SHEET = "Parcelas"
CURRENCY_FORMAT = '"R$" #,##0.00'
QUOTAS_SEPARATOR = ";"
YES = "Sim"
NO = "Não"

# (cabeçalho, chave, largura, formato)
SALES_COLUMNS = [
    ("ID", "id", 8, None),
    ("Data", "sale_date", 12, "yyyy-mm-dd"),
    ("Consultor", "consultant_name", 18, None),
    ("Cliente", "client_name", 26, None),
    ("Produto", "product", 14, None),
    ("Base", "base_value", 14, CURRENCY_FORMAT),
    ("Comissão %", "commission_percentage", 12, "0.00"),
    ("Comissão", "total_commission", 14, CURRENCY_FORMAT),
    ("Crédito gerado", "credit_generated", 18, CURRENCY_FORMAT),
    ("Seguro", "insurance", 10, None),
    ("Cotas", "quotas", 8, None),
    ("Valor unit", "unit_value", 14, CURRENCY_FORMAT),
    ("Valores cotas", "quotas_values", 30, None),
]

INSTALLMENTS_COLUMNS = [
    ("Venda ID", "sale_id", 10, None),
    ("Data venda", "sale_date", 12, "yyyy-mm-dd"),
    ("Consultor", "consultant_name", 18, None),
    ("Cliente", "client_name", 26, None),
    ("Produto", "product", 14, None),
    ("Parcela nº", "number", 10, None),
    ("Valor", "value", 14, CURRENCY_FORMAT),
    ("Vencimento", "due_date", 12, "yyyy-mm-dd"),
    ("Status", "status", 10, None),
    ("Boleto atrasado", "bill_overdue", 15, None),
    ("Pago em", "paid_date", 12, "yyyy-mm-dd"),
]


def _write_sheet(sheet: Any, columns: List[Tuple], rows: List[Dict[str, Any]]) -> None:
    sheet.append([header for header, _, _, _ in columns])
    for cell in sheet[1]:
        cell.font = Font(bold=True)

    for row in rows:
        sheet.append([row.get(key) for _, key, _, _ in columns])

    for index, (_, _, width, number_format) in enumerate(columns, start=1):
        letter = get_column_letter(index)
        sheet.column_dimensions[letter].width = width
        if number_format:
            for (cell,) in sheet.iter_rows(min_row=2, min_col=index, max_col=index):
                cell.number_format = number_format

    sheet.auto_filter.ref = f"A1:{get_column_letter(len(columns))}1"


def _read_sheet(sheet: Any, columns: List[Tuple]) -> List[Tuple[int, Dict[str, Any]]]:
    keys_by_header = {header: key for header, key, _, _ in columns}
    rows = sheet.iter_rows(values_only=True)
    headers = next(rows, None) or []
    keys = [keys_by_header.get(str(header).strip()) if header else None for header in headers]

    parsed = []
    for row_number, values in enumerate(rows, start=2):
        if not any(value not in (None, "") for value in values):
            continue

        parsed.append(
            (
                row_number,
                {key: value for key, value in zip(keys, values) if key is not None},
            )
        )

    return parsed


def _as_date(value: Any) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    for date_format in ("%Y-%m-%d", "%d/%m/%Y"):
        try:
            return datetime.strptime(text, date_format).date()
        except ValueError:
            continue

    raise InvalidArgument(f"Data inválida na planilha: {value}")


def _as_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("sim", "s", "yes", "true", "1")

    return bool(value)


def _as_quotas_values(value: Any) -> Optional[List[float]]:
    if value in (None, ""):
        return None

    return [
        float(to_decimal(part.strip().replace(",", ".")))
        for part in str(value).split(QUOTAS_SEPARATOR)
        if part.strip()
    ]


class SpreadsheetService(AbstractService):
    def __init__(self, today: Callable[[], date] = current_date) -> None:
        super().__init__(today)
        self.__sale_repository = SaleRepository()
        self.__sale_service = SaleService(today=today)
        self.__consultant_service = ConsultantService()

    @property
    def _repository(self) -> SaleRepository:
        return self.__sale_repository

    def export_xlsx(self, actor: Actor, scope: str = "me") -> Tuple[str, bytes]:
        effective_scope = "all" if actor.is_admin and scope == "all" else "me"
        consultant_id = None if effective_scope == "all" else actor.consultant_id

        if effective_scope == "me" and consultant_id is None:
            sales = []
        else:
            sales = self._repository.list_for(consultant_id)

        today = self._today()
        sale_rows = []
        installment_rows = []
        for sale in sales:
            values = quota_values(sale.quotas)
            sale_rows.append(
                {
                    "id": sale.id,
                    "sale_date": sale.sale_date,
                    "consultant_name": sale.consultant_name,
                    "client_name": sale.client_name,
                    "product": sale.product,
                    "base_value": float(round_money(sale.base_value)),
                    "commission_percentage": float(to_decimal(sale.commission_percentage)),
                    "total_commission": float(round_money(sale.total_commission)),
                    "credit_generated": float(round_money(sale.credit_generated or 0)),
                    "insurance": YES if sale.insurance else NO,
                    "quotas": len(values),
                    "unit_value": float(values[0]) if values else 0.0,
                    "quotas_values": QUOTAS_SEPARATOR.join(f"{value:.2f}" for value in values),
                }
            )
            for installment in sale.installments:
                installment_rows.append(
                    {
                        "sale_id": sale.id,
                        "sale_date": sale.sale_date,
                        "consultant_name": sale.consultant_name,
                        "client_name": sale.client_name,
                        "product": sale.product,
                        "number": installment.number,
                        "value": float(round_money(installment.value)),
                        "due_date": installment.due_date,
                        "status": resolve_status(installment, today).value,
                        "bill_overdue": YES if installment.bill_overdue else NO,
                        "paid_date": installment.paid_date,
                    }
                )

        workbook = Workbook()
        sales_sheet = workbook.active
        sales_sheet.title = SALES_SHEET
        _write_sheet(sales_sheet, SALES_COLUMNS, sale_rows)
        _write_sheet(
            workbook.create_sheet(INSTALLMENTS_SHEET), INSTALLMENTS_COLUMNS, installment_rows
        )
        workbook.properties.creator = "Dashboard de Comissões"

        output = BytesIO()
        workbook.save(output)

        self._logger.info(
            f"Exportadas {len(sale_rows)} vendas e {len(installment_rows)} parcelas "
            f"(escopo {effective_scope}) para o usuário {actor.user_id}."
        )

        filename = f"export-{effective_scope}-{today.isoformat()}.xlsx"

        return filename, output.getvalue()

    def import_xlsx(self, actor: Actor, content: bytes) -> Dict[str, Any]:
        """
        Cria uma venda por linha da aba de vendas. Parcelas da aba de parcelas
        são associadas pela coluna de ID da venda. Falha em uma linha é
        registrada e não interrompe as demais.
        """
        try:
            workbook = load_workbook(BytesIO(content), data_only=True, read_only=True)
        except (InvalidFileException, BadZipFile, KeyError, OSError) as error:
            self._logger.exception(f"Arquivo de importação ilegível: {error}")
            raise InvalidArgument(detail=f"Arquivo xlsx inválido: {error}")

        installments_by_sale = defaultdict(list)
        try:
            if SALES_SHEET not in workbook.sheetnames:
                raise InvalidArgument(
                    detail=f"Aba {SALES_SHEET} não encontrada na planilha."
                )

            sale_rows = _read_sheet(workbook[SALES_SHEET], SALES_COLUMNS)
            if INSTALLMENTS_SHEET in workbook.sheetnames:
                for _, row in _read_sheet(
                    workbook[INSTALLMENTS_SHEET], INSTALLMENTS_COLUMNS
                ):
                    installments_by_sale[str(row.get("sale_id"))].append(row)
        finally:
            workbook.close()

        summary = {"createdSales": 0, "createdConsultants": 0, "errors": []}
        for row_number, row in sale_rows:
            try:
                consultant_id = actor.consultant_id
                if actor.is_admin:
                    consultant_id, created = self._consultant_for(row)
                    summary["createdConsultants"] += int(created)

                sale = self._sale_from_row(
                    row, consultant_id, installments_by_sale.get(str(row.get("id")), [])
                )
                self.__sale_service.create(actor, sale)
                summary["createdSales"] += 1
            except ApiError as error:
                summary["errors"].append(
                    {"row": row_number, "error": error.code, "detail": str(error.detail)}
                )
            except (ValidationError, ValueError) as error:
                summary["errors"].append(
                    {"row": row_number, "error": "invalid_argument", "detail": str(error)}
                )

        self._logger.info(
            f"Importação concluída: {summary['createdSales']} vendas, "
            f"{summary['createdConsultants']} consultores, "
            f"{len(summary['errors'])} erros."
        )

        return summary

    def _consultant_for(self, row: Dict[str, Any]) -> Tuple[Optional[int], bool]:
        name = str(row.get("consultant_name") or "").strip()
        if not name:
            return None, False

        consultant, created = self.__consultant_service.find_or_create_by_name(name)

        return consultant.id, created

    @staticmethod
    def _sale_from_row(
        row: Dict[str, Any],
        consultant_id: Optional[int],
        installment_rows: List[Dict[str, Any]],
    ) -> SaleCreateSchema:
        installments = [
            InstallmentInputSchema(
                number=installment.get("number"),
                value=installment.get("value"),
                due_date=_as_date(installment.get("due_date")),
                status=installment.get("status"),
                bill_overdue=_as_flag(installment.get("bill_overdue")),
                paid_date=_as_date(installment.get("paid_date")),
            )
            for installment in installment_rows
        ]

        quotas_values = _as_quotas_values(row.get("quotas_values"))
        has_legacy_shape = row.get("quotas") not in (None, "") and not quotas_values

        return SaleCreateSchema(
            consultant_id=consultant_id,
            client_name=row.get("client_name"),
            product=row.get("product"),
            sale_date=_as_date(row.get("sale_date")),
            insurance=_as_flag(row.get("insurance")),
            quotas_values=quotas_values,
            quotas=row.get("quotas") if has_legacy_shape else None,
            unit_value=row.get("unit_value") if has_legacy_shape else None,
            base_value=None if quotas_values or has_legacy_shape else row.get("base_value"),
            commission_percentage=row.get("commission_percentage"),
            credit_generated=row.get("credit_generated") or 0,
            installments=installments or None,
        )
