from records.commands import FetchNextPage
from records.forms import form_to_wire_record, record_to_form, reflect_form
from records.models import FormData, Page, Record
from records.pager import Pager


class TestPager:
    def test_empty(self, resource):
        pager = Pager.empty(resource)
        assert pager.objects == ()
        assert not pager.has_next()
        assert pager.load_next() is None

    def test_first_page_replaces_objects(self, resource, sample_records):
        pager = Pager(resource=resource, objects=sample_records, next_page="old", total=10)
        updated = pager.update(Page(objects=sample_records[:1], next_page=None, total=1))
        assert updated.objects == sample_records[:1]
        assert updated.next_page is None
        assert updated.total == 1
        assert updated.resource == resource

    def test_continuation_page_appends(self, resource, sample_records):
        pager = Pager.empty(resource).update(Page(objects=sample_records[:2], next_page="http://n", total=3))
        assert pager.load_next() == FetchNextPage(resource=resource, url="http://n")
        pager = pager.update(Page(objects=sample_records[2:], total=3, continuation=True))
        assert pager.objects == sample_records
        assert not pager.has_next()

    def test_remove_only_matching_id(self, resource, sample_records):
        pager = Pager(resource=resource, objects=sample_records)
        assert [r.id for r in pager.remove("a").objects] == ["b", "c"]
        assert pager.remove("missing").objects == sample_records

    def test_patch_keeps_order(self, resource, sample_records):
        pager = Pager(resource=resource, objects=sample_records).patch("c", title="Gamma")
        assert [r.id for r in pager.objects] == ["a", "b", "c"]
        assert pager.objects[2] == Record(id="c", title="Gamma", description="third", last_modified=100)


class TestForms:
    def test_record_to_form(self):
        record = Record(id="x", title=None, description="d", last_modified=3)
        assert record_to_form(record) == FormData(id="x", title="", description="d")

    def test_wire_record_never_carries_id(self):
        body = form_to_wire_record(FormData(id="x", title="t", description="d"))
        assert body == {"title": "t", "description": "d"}

    def test_record_form_wire_round_trip(self, sample_records):
        for record in sample_records:
            assert form_to_wire_record(record_to_form(record)) == {
                "title": record.title or "",
                "description": record.description or "",
            }

    def test_reflect_form_ignores_new_drafts(self, resource, sample_records):
        pager = Pager(resource=resource, objects=sample_records)
        assert reflect_form(pager, FormData(title="new")) is pager

    def test_reflect_form_unknown_id_is_noop(self, resource, sample_records):
        pager = Pager(resource=resource, objects=sample_records)
        assert reflect_form(pager, FormData(id="zzz", title="t")).objects == sample_records
