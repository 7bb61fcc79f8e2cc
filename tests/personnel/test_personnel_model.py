from src.class_attendance.class_attendance.core.enums import Category, SubCategory
from src.class_attendance.class_attendance.personnel.model import Personnel, parse_category, parse_sub_category


def test_known_tokens_parse_to_enums():
    assert parse_category("HC") is Category.HC
    assert parse_sub_category("General Duty") is SubCategory.GENERAL_DUTY
    assert parse_sub_category("") is None
    assert parse_sub_category(None) is None


def test_unknown_stored_tokens_are_kept_verbatim():
    assert parse_category("TRAINEE") == "TRAINEE"
    assert parse_sub_category("Traffic") == "Traffic"

    person = Personnel(
        personnel_id=1,
        employee_id="PC 4",
        name="PC 4",
        category=parse_category("PC"),
        sub_category=parse_sub_category("Traffic"),
    )
    assert person.to_dict()["sub_category"] == "Traffic"
