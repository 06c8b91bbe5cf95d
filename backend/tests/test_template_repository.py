from app.db.paging import Page, Pageable
from app.repositories.template_repository import TemplateRepository
from app.services.template_service import build_filter_spec


def test_owner_listing_excludes_deleted_and_orders_by_sort_code(db, make_user, make_template):
    owner = make_user()
    other = make_user()
    a = make_template(owner.id, "A", sort_code=2)
    b = make_template(owner.id, "B", sort_code=1)
    make_template(owner.id, "C", sort_code=0, is_deleted=True)
    make_template(other.id, "D", sort_code=0)

    repo = TemplateRepository(db)
    page = repo.find_by_owner_id_and_is_deleted_is_false_order_by_sort_code_asc(owner.id, Pageable(0, 10))

    assert [t.id for t in page.content] == [b.id, a.id]
    assert page.total_elements == 2


def test_owner_listing_pages(db, make_user, make_template):
    owner = make_user()
    for i in range(7):
        make_template(owner.id, f"t{i}", sort_code=i)

    repo = TemplateRepository(db)
    page = repo.find_by_owner_id_and_is_deleted_is_false_order_by_sort_code_asc(owner.id, Pageable(2, 3))

    assert [t.name for t in page.content] == ["t6"]
    assert page.total_elements == 7
    assert page.total_pages == 3
    assert page.number == 2
    assert page.last
    assert not page.first


def test_find_all_with_spec(db, make_user, make_template):
    owner = make_user()
    make_template(owner.id, "foo one", sort_code=5, tags="x,y")
    make_template(owner.id, "bar", description="about foo", sort_code=1, tags="y")
    make_template(owner.id, "foo deleted", sort_code=0, is_deleted=True)
    make_template(owner.id, "unrelated", sort_code=3)

    repo = TemplateRepository(db)
    page = repo.find_all(build_filter_spec(owner.id, keyword="foo"), Pageable(0, 10))
    assert [t.name for t in page.content] == ["bar", "foo one"]
    assert page.total_elements == 2

    page = repo.find_all(build_filter_spec(owner.id, keyword="foo", tag="x"), Pageable(0, 10))
    assert [t.name for t in page.content] == ["foo one"]


def test_find_one_and_save(db, make_user, make_template):
    owner = make_user()
    t = make_template(owner.id, "T")
    repo = TemplateRepository(db)

    assert repo.find_one(t.id) is t
    assert repo.find_one(t.id + 100) is None

    t.name = "renamed"
    repo.save(t)
    db.expire_all()
    assert repo.find_one(t.id).name == "renamed"


def test_page_metadata_for_empty_result():
    page = Page(content=[], total_elements=0, number=0, size=10)
    assert page.total_pages == 0
    assert page.first
    assert page.last
    assert page.number_of_elements == 0
