import pytest
from api.services.ledger import categories, ConflictError, LedgerValidationError


def test_add_category(db_session, outsider):
    """Any caller may register a category."""
    categories.add_category(db_session, outsider, "Leafy greens", "USER001")
    names = [c.name for c in categories.get_all_categories(db_session)]
    assert names == ["Leafy greens"]


def test_categories_by_user(db_session, writer):
    categories.add_category(db_session, writer, "Leafy greens", "USER001")
    categories.add_category(db_session, writer, "Fruit", "USER001")
    categories.add_category(db_session, writer, "Rice", "USER002")

    user_categories = categories.get_categories_by_user_id(db_session, "USER001")
    assert [c.name for c in user_categories] == ["Leafy greens", "Fruit"]
    assert categories.get_categories_by_user_id(db_session, "USER404") == []


def test_category_exists(db_session, writer):
    categories.add_category(db_session, writer, "Leafy greens", "USER001")
    assert categories.category_exists(db_session, "Leafy greens") is True
    assert categories.category_exists(db_session, "Missing") is False


def test_category_names_are_global(db_session, writer):
    categories.add_category(db_session, writer, "Leafy greens", "USER001")
    with pytest.raises(ConflictError):
        categories.add_category(db_session, writer, "Leafy greens", "USER002")
    assert len(categories.get_all_categories(db_session)) == 1


def test_empty_category_name(db_session, writer):
    with pytest.raises(LedgerValidationError):
        categories.add_category(db_session, writer, "", "USER001")
