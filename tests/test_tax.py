import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import tax


def test_federal_tax_first_bracket():
    assert float(tax.federal_tax(10_000)) == 1_000


def test_federal_tax_spans_brackets():
    # 1,160 + 4,266 + 627
    assert float(tax.federal_tax(50_000, "single")) == 6_053


def test_federal_tax_is_vectorised():
    result = tax.federal_tax(np.array([0, 10_000, 50_000]))
    assert result.tolist() == [0, 1_000, 6_053]


def test_federal_tax_negative_income_is_zero():
    assert float(tax.federal_tax(-5_000)) == 0


def test_mfj_brackets_are_wider_than_single():
    assert float(tax.federal_tax(150_000, "mfj")) < float(tax.federal_tax(150_000, "single"))


def test_unknown_filing_status_files_as_single():
    assert float(tax.federal_tax(80_000, "hoh")) == float(tax.federal_tax(80_000, "single"))


def test_marginal_federal_rate():
    assert tax.marginal_federal_rate(50_000) == pytest.approx(0.22)
    assert tax.marginal_federal_rate(700_000) == pytest.approx(0.37)


def test_state_tax_rate_lookup():
    assert tax.state_tax_rate("CA") == 0.133
    assert tax.state_tax_rate("TX") == 0.0
    assert tax.state_tax_rate("ZZ") == 0.05


def test_effective_marginal_rate_adds_state():
    assert tax.effective_marginal_rate(50_000, "single", "CA") == pytest.approx(0.353)


def test_no_tax_when_nothing_forgiven():
    assert tax.estimate_tax_on_forgiveness(0, 300_000, "CA") == 0
    assert tax.estimate_tax_on_forgiveness(-100, 300_000, "CA") == 0


def test_forgiveness_tax_federal_increment_only_in_zero_tax_state():
    # 300k -> 400k single sits entirely in the 35% band
    assert tax.estimate_tax_on_forgiveness(100_000, 300_000, "TX") == pytest.approx(35_000, abs=1)


def test_forgiveness_tax_higher_in_california_than_texas():
    ca = tax.estimate_tax_on_forgiveness(100_000, 300_000, "CA")
    tx = tax.estimate_tax_on_forgiveness(100_000, 300_000, "TX")
    assert ca > tx
    assert ca - tx == pytest.approx(13_300, abs=1)
