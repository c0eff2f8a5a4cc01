import pandas as pd
import pytest

from waffleviz.services.scale_domain import resolve
from waffleviz.services.type_inference import DomainKind


def test_ordinal_domain_keeps_first_seen_order():
    data = [{"c": "b"}, {"c": "a"}, {"c": "b"}, {"c": "c"}]
    domain = resolve(data, "c", DomainKind.ordinal)
    assert domain.values == ("b", "a", "c")
    assert domain.is_ordinal


def test_linear_domain_is_min_max():
    data = [{"v": "3"}, {"v": "10"}, {"v": "-2"}, {"v": "n/a"}]
    domain = resolve(data, "v", DomainKind.linear)
    assert domain.extent == (-2.0, 10.0)


def test_temporal_domain_is_chronological():
    data = [{"d": "2020-03-01"}, {"d": "2020-01-01"}, {"d": "2020-02-01"}]
    domain = resolve(data, "d", "temporal")
    assert domain.kind == DomainKind.temporal
    assert domain.extent == (pd.Timestamp("2020-01-01"), pd.Timestamp("2020-03-01"))


def test_unknown_kind_has_no_domain():
    with pytest.raises(ValueError):
        resolve([{"c": "a"}], "c", DomainKind.unknown)


def test_ordinal_domain_has_no_extent():
    domain = resolve([{"c": "a"}], "c", DomainKind.ordinal)
    with pytest.raises(ValueError):
        domain.extent
