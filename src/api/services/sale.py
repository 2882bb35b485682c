from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from api.auth.actor import Actor
from api.configurations.config import current_date
from api.schemas.sale import (
    SaleCreateSchema,
    SaleInstallmentsUpdateSchema,
    SaleQuotasUpdateSchema,
    SaleUpdateSchema,
)
from api.services.abstract_service import AbstractService
from common.billing.commission import calculate_commission
from common.billing.installment_schedule import (
    InstallmentEntry,
    coerce_status,
    replace_schedule,
    rescale,
    resolve_display_status,
)
from common.billing.money import ZERO, is_finite_number, round_money, to_decimal
from common.billing.product import parse_product
from common.billing.quota_ledger import (
    build_ledger,
    quota_values,
    resize_quotas,
    sum_of,
)
from common.billing.quota_source import (
    ExplicitQuotas,
    SingleBaseValue,
    quota_source_from,
)
from common.exceptions import (
    EntityNotFound,
    Forbidden,
    InvalidArgument,
    MissingFields,
)
from common.models.commissions import InstallmentModel, SaleModel
from common.repositories.commissions.consultant import ConsultantRepository
from common.repositories.commissions.installment import InstallmentRepository
from common.repositories.commissions.sale import SaleRepository
from common.repositories.commissions.sale_quota import SaleQuotaRepository


def installment_entry(installment: InstallmentModel) -> InstallmentEntry:
    return InstallmentEntry(
        number=installment.number,
        value=to_decimal(installment.value),
        due_date=installment.due_date,
        status=coerce_status(installment.status),
        bill_overdue=bool(installment.bill_overdue),
        paid_date=installment.paid_date,
    )


def installment_to_dict(installment: Any, today: date) -> Dict[str, Any]:
    return {
        "number": installment.number,
        "value": float(round_money(installment.value)),
        "due_date": installment.due_date,
        "status": coerce_status(installment.status).value,
        "display_status": resolve_display_status(installment, today).value,
        "bill_overdue": bool(installment.bill_overdue),
        "paid_date": installment.paid_date,
    }


class SaleService(AbstractService):
    """
    Mantém venda, livro de cotas e cronograma de parcelas consistentes entre
    si a cada edição: valor base sempre igual à soma das cotas e comissão
    total sempre igual a ``valor base * percentual / 100``.
    """

    def __init__(self, today: Callable[[], date] = current_date) -> None:
        super().__init__(today)
        self.__repository = SaleRepository()
        self.__quota_repository = SaleQuotaRepository()
        self.__installment_repository = InstallmentRepository()
        self.__consultant_repository = ConsultantRepository()

    @property
    def _repository(self) -> SaleRepository:
        return self.__repository

    def to_dict(self, sale: SaleModel) -> Dict[str, Any]:
        today = self._today()
        values = quota_values(sale.quotas)

        return {
            "id": sale.id,
            "consultant_id": sale.consultant_id,
            "consultant_name": sale.consultant_name,
            "client_name": sale.client_name,
            "product": sale.product,
            "sale_date": sale.sale_date,
            "insurance": bool(sale.insurance),
            "base_value": float(round_money(sale.base_value)),
            "quotas": len(values),
            "unit_value": float(values[0]) if values else 0.0,
            "commission_percentage": float(to_decimal(sale.commission_percentage)),
            "total_commission": float(round_money(sale.total_commission)),
            "credit_generated": float(round_money(sale.credit_generated or 0)),
            "created_at": sale.created_at,
            "modified_at": sale.modified_at,
            "quotas_values": [float(value) for value in values],
            "installments": [
                installment_to_dict(installment, today)
                for installment in sale.installments
            ],
        }

    def _get_owned(self, actor: Actor, sale_id: int) -> SaleModel:
        try:
            sale = self._repository.get_by_id(sale_id)
        except EntityNotFound:
            raise EntityNotFound(detail=f"Venda {sale_id} não encontrada.")

        if not actor.can_mutate(sale.consultant_id):
            self._logger.info(
                f"Usuário {actor.user_id} sem permissão sobre a venda {sale_id}."
            )
            raise Forbidden(detail=f"Venda {sale_id} pertence a outro consultor.")

        return sale

    def list(self, actor: Actor) -> List[Dict[str, Any]]:
        sales = self._repository.list_for(actor.scope_consultant_id())
        return [self.to_dict(sale) for sale in sales]

    def get(self, actor: Actor, sale_id: int) -> Dict[str, Any]:
        return self.to_dict(self._get_owned(actor, sale_id))

    def _resolve_consultant(self, actor: Actor, consultant_id: Optional[int]):
        target_id = consultant_id if actor.is_admin else actor.consultant_id
        if not target_id:
            raise MissingFields(
                detail="Consultor da venda não informado.", code="missing_consultant"
            )

        try:
            return self.__consultant_repository.get_by_id(target_id)
        except EntityNotFound:
            raise InvalidArgument(
                detail=f"Consultor {target_id} não encontrado.",
                code="invalid_consultant",
            )

    @staticmethod
    def _validated_percentage(percentage: Any) -> Decimal:
        percentage = to_decimal(percentage)
        if percentage < 0:
            raise InvalidArgument(f"Percentual de comissão negativo: {percentage}.")

        return percentage

    @staticmethod
    def _validated_credit(credit_generated: Any) -> Decimal:
        if credit_generated is None:
            return ZERO

        return round_money(credit_generated)

    def create(self, actor: Actor, sale: SaleCreateSchema) -> Dict[str, Any]:
        consultant = self._resolve_consultant(actor, sale.consultant_id)

        missing = [
            field
            for field, present in (
                ("client_name", bool((sale.client_name or "").strip())),
                ("product", bool((sale.product or "").strip())),
                ("sale_date", sale.sale_date is not None),
                (
                    "base_value",
                    all(
                        value is None or is_finite_number(value)
                        for value in (sale.base_value, sale.unit_value)
                    ),
                ),
                ("commission_percentage", is_finite_number(sale.commission_percentage)),
            )
            if not present
        ]
        if missing:
            raise MissingFields(
                detail=f"Campos obrigatórios não informados: {', '.join(missing)}."
            )

        product = parse_product(sale.product)
        percentage = self._validated_percentage(sale.commission_percentage)
        source = quota_source_from(
            sale.quotas_values, sale.quotas, sale.unit_value, sale.base_value
        )
        ledger = build_ledger(source.values())
        base_value = sum_of(ledger)
        total_commission = calculate_commission(base_value, percentage)
        schedule = replace_schedule(
            sale.installments, total_commission, sale.sale_date, self._today()
        )

        self._logger.debug(
            f"Criando venda para o consultor {consultant.id} com {len(ledger)} cotas, "
            f"valor base {base_value} e comissão {total_commission}."
        )

        with self._repository.transaction():
            created = self._repository.create(
                {
                    "consultant_id": consultant.id,
                    "consultant_name": consultant.name,
                    "client_name": sale.client_name.strip(),
                    "product": product.value,
                    "sale_date": sale.sale_date,
                    "insurance": bool(sale.insurance),
                    "base_value": base_value,
                    "commission_percentage": percentage,
                    "total_commission": total_commission,
                    "credit_generated": self._validated_credit(sale.credit_generated),
                },
                commit_at_the_end=False,
            )
            self.__quota_repository.replace(created.id, ledger, commit_at_the_end=False)
            self.__installment_repository.replace(
                created.id, schedule, commit_at_the_end=False
            )

        self._logger.info(f"Venda {created.id} criada por usuário {actor.user_id}.")

        return self.to_dict(self._repository.refresh(created))

    def update(
        self, actor: Actor, sale_id: int, sale: SaleUpdateSchema
    ) -> Dict[str, Any]:
        """
        Edição de dados da venda. Sem lista de parcelas no corpo, o cronograma
        existente não é alterado, mesmo que a comissão total mude.
        """
        existing = self._get_owned(actor, sale_id)
        fields = sale.model_fields_set

        attributes: Dict[str, Any] = {}
        if "client_name" in fields:
            if not (sale.client_name or "").strip():
                raise MissingFields(detail="Nome do cliente não pode ser vazio.")
            attributes["client_name"] = sale.client_name.strip()
        if "product" in fields:
            attributes["product"] = parse_product(sale.product).value
        if "sale_date" in fields:
            if sale.sale_date is None:
                raise MissingFields(detail="Data da venda não pode ser vazia.")
            attributes["sale_date"] = sale.sale_date
        if "insurance" in fields and sale.insurance is not None:
            attributes["insurance"] = sale.insurance
        if "credit_generated" in fields:
            attributes["credit_generated"] = self._validated_credit(
                sale.credit_generated
            )

        ledger = None
        if sale.quotas_values:
            ledger = build_ledger(ExplicitQuotas(sale.quotas_values).values())
        elif sale.base_value is not None:
            ledger = build_ledger(SingleBaseValue(sale.base_value).values())

        base_value = sum_of(ledger) if ledger else to_decimal(existing.base_value)
        percentage = to_decimal(existing.commission_percentage)
        if sale.commission_percentage is not None:
            percentage = self._validated_percentage(sale.commission_percentage)

        total_commission = calculate_commission(base_value, percentage)
        attributes.update(
            {
                "base_value": base_value,
                "commission_percentage": percentage,
                "total_commission": total_commission,
            }
        )

        schedule = None
        if sale.installments is not None:
            schedule = replace_schedule(
                sale.installments,
                total_commission,
                attributes.get("sale_date", existing.sale_date),
                self._today(),
            )

        with self._repository.transaction():
            if ledger:
                self.__quota_repository.replace(
                    sale_id, ledger, commit_at_the_end=False
                )
            self._repository.update_entity(
                existing, attributes, commit_at_the_end=False
            )
            if schedule is not None:
                self.__installment_repository.replace(
                    sale_id, schedule, commit_at_the_end=False
                )

        self._logger.info(
            f"Venda {sale_id} atualizada por usuário {actor.user_id}: "
            f"{sorted(fields)}."
        )

        return self.to_dict(self._repository.refresh(existing))

    def update_quotas(
        self, actor: Actor, sale_id: int, quotas: SaleQuotasUpdateSchema
    ) -> Dict[str, Any]:
        existing = self._get_owned(actor, sale_id)

        if quotas.quotas_values:
            values = ExplicitQuotas(quotas.quotas_values).values()
        elif quotas.quotas is not None:
            values = quota_values(existing.quotas)
        else:
            raise MissingFields(
                detail="Lista de valores das cotas não informada.",
                code="missing_quotas_values",
            )

        if quotas.quotas is not None:
            values = resize_quotas(values, quotas.quotas)

        ledger = build_ledger(values)
        base_value = sum_of(ledger)
        new_total = calculate_commission(base_value, existing.commission_percentage)
        old_total = to_decimal(existing.total_commission)

        current = [installment_entry(installment) for installment in existing.installments]
        scaled = rescale(current, old_total, new_total)

        self._logger.debug(
            f"Reescalando {len(scaled)} parcelas da venda {sale_id} "
            f"de {old_total} para {new_total}."
        )

        with self._repository.transaction():
            self.__quota_repository.replace(sale_id, ledger, commit_at_the_end=False)
            if scaled:
                self.__installment_repository.replace(
                    sale_id, scaled, commit_at_the_end=False
                )
            self._repository.update_entity(
                existing,
                {"base_value": base_value, "total_commission": new_total},
                commit_at_the_end=False,
            )

        self._logger.info(f"Cotas da venda {sale_id} atualizadas por usuário {actor.user_id}.")

        return self.to_dict(self._repository.refresh(existing))

    def update_installments(
        self, actor: Actor, sale_id: int, installments: SaleInstallmentsUpdateSchema
    ) -> Dict[str, Any]:
        existing = self._get_owned(actor, sale_id)

        if installments.installments is None:
            raise MissingFields(
                detail="Lista de parcelas não informada.", code="missing_installments"
            )

        schedule = replace_schedule(
            installments.installments,
            existing.total_commission,
            existing.sale_date,
            self._today(),
        )

        with self._repository.transaction():
            self.__installment_repository.replace(
                sale_id, schedule, commit_at_the_end=False
            )

        self._logger.info(
            f"Parcelas da venda {sale_id} atualizadas por usuário {actor.user_id}."
        )

        refreshed = self._repository.refresh(existing)
        today = self._today()

        return {
            "ok": True,
            "installments": [
                installment_to_dict(installment, today)
                for installment in refreshed.installments
            ],
        }

    def delete(self, actor: Actor, sale_id: int) -> Dict[str, bool]:
        existing = self._get_owned(actor, sale_id)

        with self._repository.transaction():
            self._repository.delete(existing, commit_at_the_end=False)

        self._logger.info(f"Venda {sale_id} removida por usuário {actor.user_id}.")

        return {"ok": True}
