from types import MappingProxyType

from permcompare.compare import ComparisonRow, compare, compare_names, missing_names


def test_case_insensitive_difference_with_descriptions():
    rows = compare("Alpha\nBeta", "alpha\nBeta\nGamma", {"gamma": "desc G"})
    assert rows == [("Gamma", "desc G")]
    assert rows[0].name == "Gamma"
    assert rows[0].description == "desc G"


def test_subset_mirror_gives_empty_list():
    rows = compare("Alpha\nBeta\nGamma", "BETA\nalpha", {})
    assert rows == []
    assert compare("", "", {}) == []


def test_sorted_by_case_fold():
    assert missing_names([], ["zeta", "Alpha", "beta"]) == ["Alpha", "beta", "zeta"]
    assert [row.name for row in compare("", "zeta\nAlpha\nbeta", {})] == ["Alpha", "beta", "zeta"]


def test_missing_description_is_empty_string():
    rows = compare("", "Sales_User\nReport_Builder", MappingProxyType({"sales_user": "Sales access"}))
    assert rows == [
        ComparisonRow("Report_Builder", ""),
        ComparisonRow("Sales_User", "Sales access"),
    ]


def test_description_lookup_ignores_case():
    assert compare("", "GAMMA", {"gamma": "desc G"}) == [("GAMMA", "desc G")]


def test_mirror_duplicates_collapse():
    assert compare("", "Gamma\ngamma\nGAMMA", {}) == [("Gamma", "")]


def test_difference_is_asymmetric():
    assert compare("Extra_Perm\nShared", "shared", {}) == []


def test_report_shaped_inputs():
    primary = "Permission Set Name\tAction\nSales_User\tadd\t3/1/2024\n"
    mirror = (
        "Permission Set Name    Action    Date Assigned\n"
        "sales_user    add    3/1/2024\n"
        "Report_Builder    add    1/5/2024\n"
        "del 2/2/2024\n"
    )
    assert compare(primary, mirror, {"report_builder": "Build reports"}) == [
        ("Report_Builder", "Build reports"),
    ]


def test_compare_names_over_extracted_lists():
    rows = compare_names(["Alpha", "Beta"], ["alpha", "Beta", "Gamma"], {"gamma": "desc G"})
    assert rows == [("Gamma", "desc G")]
    assert compare_names([], [], {}) == []
