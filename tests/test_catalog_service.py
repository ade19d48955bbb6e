from purchase_tool.engine import Purchase
from purchase_tool.services.catalog_service import packages_frame, quote_lines_frame, variants_frame


def test_packages_frame(mock_package, premium_package):
    df = packages_frame([mock_package, premium_package])
    assert df.index.tolist() == ["wellcheck", "premium"]
    assert df.loc["wellcheck", "Cost"] == 149.0
    assert df.loc["premium", "Variants"] == 4
    assert df.loc["premium", "Defaults"] == 1
    assert bool(df.loc["premium", "Configurable"]) is True


def test_packages_frame_empty():
    df = packages_frame([])
    assert df.empty
    assert "Cost (cents)" in df.columns


def test_variants_frame(premium_package):
    df = variants_frame(premium_package)
    assert df["Code"].tolist()[0] == "consult.physician.30"
    assert set(df["Type"]) == {"consult", "vitamin_d"}
    assert df["Default"].tolist() == [True, False, False, False]


def test_quote_lines_frame(premium_package):
    quote = Purchase(premium_package, variants=["consult.physician.45"]).quote()
    df = quote_lines_frame(quote)
    assert df["Kind"].tolist() == ["package", "variant", "variant"]
    assert df.loc[1, "Covers"] == "consult.physician.30"
    assert df.loc[2, "Covers"] == ""
