import pytest

from decimal import Decimal

from common.billing.quota_ledger import (
    MAX_QUOTAS,
    QuotaEntry,
    build_ledger,
    clamp_quota_count,
    quota_values,
    resize_quotas,
    sum_of,
)
from common.billing.quota_source import (
    ExplicitQuotas,
    SingleBaseValue,
    UniformQuotas,
    quota_source_from,
)
from common.exceptions import InvalidArgument


class TestQuotaLedger:
    @classmethod
    def test_build_ledger_with_numbering_in_given_order(cls) -> None:
        ledger = build_ledger([1000, 500.555, 0])

        assert (ledger, sum_of(ledger)) == (
            [
                QuotaEntry(number=1, value=Decimal("1000.00")),
                QuotaEntry(number=2, value=Decimal("500.56")),
                QuotaEntry(number=3, value=Decimal("0.00")),
            ],
            Decimal("1500.56"),
        )

    @classmethod
    def test_build_ledger_values_read_back_equal_input(cls) -> None:
        values = [0.1, 0.2, 0.3, 99999.99]

        ledger = build_ledger(values)

        assert (quota_values(ledger), sum_of(ledger)) == (
            [Decimal("0.10"), Decimal("0.20"), Decimal("0.30"), Decimal("99999.99")],
            Decimal("100000.59"),
        )

    @classmethod
    @pytest.mark.parametrize("values", [[], [1] * (MAX_QUOTAS + 1), [100, -1]])
    def test_build_ledger_with_error_if_invalid(cls, values) -> None:
        with pytest.raises(InvalidArgument):
            build_ledger(values)

    @classmethod
    def test_resize_quotas_with_padding_and_truncation(cls) -> None:
        assert (resize_quotas([1, 2, 3], 5), resize_quotas([1, 2, 3], 2)) == (
            [Decimal("1.00"), Decimal("2.00"), Decimal("3.00"), Decimal("0.00"), Decimal("0.00")],
            [Decimal("1.00"), Decimal("2.00")],
        )

    @classmethod
    def test_clamp_quota_count(cls) -> None:
        assert (
            clamp_quota_count(0),
            clamp_quota_count(51),
            clamp_quota_count("7"),
            clamp_quota_count("abc"),
        ) == (1, 50, 7, 1)


class TestQuotaSource:
    @classmethod
    def test_explicit_quotas_with_numbers_and_dicts(cls) -> None:
        assert ExplicitQuotas([1000, {"value": 250.5}]).values() == [
            Decimal("1000.00"),
            Decimal("250.50"),
        ]

    @classmethod
    def test_uniform_quotas_with_legacy_shape(cls) -> None:
        assert UniformQuotas(3, 1000).values() == [Decimal("1000.00")] * 3

    @classmethod
    def test_uniform_quotas_with_clamped_count(cls) -> None:
        assert len(UniformQuotas(80, 10).values()) == MAX_QUOTAS

    @classmethod
    def test_uniform_quotas_with_error_if_unit_value_is_negative(cls) -> None:
        with pytest.raises(InvalidArgument):
            UniformQuotas(2, -10).values()

    @classmethod
    def test_quota_source_from_with_each_variant(cls) -> None:
        assert (
            type(quota_source_from([1, 2])),
            type(quota_source_from(quotas=3, unit_value=1000)),
            type(quota_source_from(base_value=5000)),
            type(quota_source_from()),
        ) == (ExplicitQuotas, UniformQuotas, SingleBaseValue, UniformQuotas)

    @classmethod
    def test_quota_source_from_with_base_value_only(cls) -> None:
        assert quota_source_from(base_value=5000).values() == [Decimal("5000.00")]

    @classmethod
    def test_quota_source_from_without_values(cls) -> None:
        assert quota_source_from().values() == [Decimal("0.00")]
