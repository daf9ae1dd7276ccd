from decimal import Decimal

from billingdesk.services.price_lines import build_all_lines, compute_line


def test_lines_for_base_price():
    lines = build_all_lines(Decimal("10"), addon=Decimal("2"))
    assert set(lines) == {"A", "Nos", "Voice", "Data"}
    assert lines["A"].gross == Decimal("11.60")
    assert lines["A"].vat == Decimal("1.60")
    assert lines["A"].after_addon == Decimal("13.60")
    assert lines["Data"] == lines["A"]
    assert lines["Voice"].gross == Decimal("14.616")
    assert lines["Nos"].gross == Decimal("13.108")


def test_non_finite_inputs_count_as_zero():
    line = compute_line(float("inf"), Decimal("1.16"), addon="nan")
    assert line.net == 0
    assert line.gross == 0
    assert line.after_addon == 0
    assert build_all_lines("abc")["Voice"].gross == 0
