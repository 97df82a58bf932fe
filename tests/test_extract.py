from permcompare.extract import extract_name, extract_names, sanitize_text
from permcompare.normalize import fold


REPORT = """Permission Set Name\tAction\tDate Assigned\tExpires On
Sales_User\tadd\t3/1/2024\t
add\t3/1/2024
Marketing_Admin\tdel\t2/12/24
  sales_user  \t\t
Report_Builder    remove    11/30/2023
3/1/2024, Service_Console
"""


def test_header_row_yields_nothing():
    assert extract_name("Permission Set Name    Action") is None
    assert extract_name("permission set name\tACTION\tDate") is None


def test_action_and_date_rows_yield_nothing():
    assert extract_name("add 3/14/2024") is None
    assert extract_name("12/1/24") is None
    assert extract_name("3/1/2024\tdel") is None


def test_blank_lines_yield_nothing():
    assert extract_name("") is None
    assert extract_name("  \t  ") is None


def test_first_surviving_token_wins():
    assert extract_name("Foo\tBar\t1/2/24") == "Foo"
    assert extract_name("add\tSales_User\t3/1/2024") == "Sales_User"
    assert extract_name("3/1/2024, Marketing_Admin") == "Marketing_Admin"
    assert extract_name("Expires On\tReport_Builder") == "Report_Builder"


def test_original_casing_is_kept():
    assert extract_name("   Sales_USER   ") == "Sales_USER"


def test_header_fragment_aborts_line():
    assert extract_name("add\tPermission Set Name\tFoo") is None


def test_header_fragment_after_a_name_is_not_reached():
    assert extract_name("Sales_User\tPermission Set Name") == "Sales_User"


def test_fallback_to_first_token_when_everything_is_noise():
    assert extract_name("Expires On\tadd") == "Expires On"
    assert extract_name("Date Assigned") == "Date Assigned"


def test_single_column_export():
    assert extract_names("Alpha_Perm\nBeta_Perm") == ["Alpha_Perm", "Beta_Perm"]


def test_report_extraction():
    assert extract_names(REPORT) == [
        "Sales_User",
        "Marketing_Admin",
        "Report_Builder",
        "Service_Console",
    ]


def test_duplicates_keep_first_casing():
    assert extract_names("Foo\nfoo\nFOO\nBar") == ["Foo", "Bar"]


def test_windows_line_endings():
    assert extract_names("Foo\r\nBar\r\n") == ["Foo", "Bar"]


def test_names_are_case_fold_unique():
    names = extract_names(REPORT + REPORT.upper() + REPORT.lower())
    assert len({fold(n) for n in names}) == len(names)


def test_sanitize_is_idempotent():
    messy = REPORT + "Foo, Bar\t1/2/24\nA  B\tx\nadd 1/2/24\tadd\n"
    once = sanitize_text(messy)
    assert sanitize_text(once) == once
    assert extract_names(once) == extract_names(messy)


def test_names_that_would_retokenize_are_settled():
    assert extract_name("Foo, Bar\t1/2/24") == "Foo, Bar"
    assert extract_names("Foo, Bar\t1/2/24") == ["Foo"]
    assert extract_names("add 1/2/24\tadd") == []


def test_empty_text():
    assert extract_names("") == []
    assert sanitize_text("") == ""


def test_non_ascii_digit_dates_are_names():
    assert extract_name("٣/١/٢٠٢٤") == "٣/١/٢٠٢٤"
