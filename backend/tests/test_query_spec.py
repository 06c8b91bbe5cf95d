import pytest
from sqlalchemy import select

from app.db.query import AnyOf, Contains, Eq, QuerySpec
from app.models.template import Template


def _names(db, spec):
    return [t.name for t in db.execute(spec.compile(Template)).scalars()]


def test_builder_accumulates_typed_conditions():
    spec = (
        QuerySpec()
        .eq("owner_id", 3)
        .any_of(Contains("name", "a"), Contains("description", "a"))
        .order_by("sort_code")
    )
    assert spec.conditions == [
        Eq("owner_id", 3),
        AnyOf((Contains("name", "a"), Contains("description", "a"))),
    ]
    assert [o.field for o in spec.ordering] == ["sort_code"]


def test_compile_filters_and_orders(db, make_user, make_template):
    owner = make_user()
    make_template(owner.id, "beta", sort_code=2, category="doc")
    make_template(owner.id, "alpha", sort_code=1, category="doc")
    make_template(owner.id, "gamma", sort_code=0, category="sheet")

    spec = QuerySpec().eq("owner_id", owner.id).eq("category", "doc").order_by("sort_code")
    assert _names(db, spec) == ["alpha", "beta"]

    spec = QuerySpec().eq("owner_id", owner.id).order_by("sort_code", descending=True)
    assert _names(db, spec) == ["beta", "alpha", "gamma"]


def test_contains_is_case_sensitive(db, make_user, make_template):
    owner = make_user()
    make_template(owner.id, "Report")
    make_template(owner.id, "report draft")

    assert _names(db, QuerySpec().contains("name", "report")) == ["report draft"]


def test_contains_treats_wildcards_literally(db, make_user, make_template):
    owner = make_user()
    make_template(owner.id, "100% done")
    make_template(owner.id, "1000 done")
    make_template(owner.id, "a_b")
    make_template(owner.id, "axb")

    assert _names(db, QuerySpec().contains("name", "0%")) == ["100% done"]
    assert _names(db, QuerySpec().contains("name", "a_b")) == ["a_b"]


def test_any_of_is_an_or_group(db, make_user, make_template):
    owner = make_user()
    make_template(owner.id, "plain", description="has foo inside", sort_code=1)
    make_template(owner.id, "foo title", sort_code=2)
    make_template(owner.id, "other", description="nothing", sort_code=3)

    spec = QuerySpec().any_of(Contains("name", "foo"), Contains("description", "foo")).order_by("sort_code")
    assert _names(db, spec) == ["plain", "foo title"]


def test_compile_count_matches_conditions(db, make_user, make_template):
    owner = make_user()
    for i in range(5):
        make_template(owner.id, f"t{i}", is_deleted=(i % 2 == 0))
    spec = QuerySpec().eq("is_deleted", False)
    assert db.execute(spec.compile_count(Template)).scalar_one() == 2


def test_unknown_field_is_rejected():
    with pytest.raises(ValueError):
        QuerySpec().eq("no_such_column", 1).compile(Template)


def test_any_of_requires_conditions():
    with pytest.raises(ValueError):
        QuerySpec().any_of()


def test_empty_spec_selects_everything():
    stmt = QuerySpec().compile(Template)
    assert str(stmt) == str(select(Template))
