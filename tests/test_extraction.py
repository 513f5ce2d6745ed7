import pytest

from html_extractor.coercion import UNAVAILABLE
from html_extractor.config import AttributeSource, ObjectTemplate, PropertyTemplate, ValueType
from html_extractor.errors import SelectorCompileError
from html_extractor.extraction import ExtractedObject, TemplateExtractor
from html_extractor.output import OutputFormat

from conftest import TWO_USERS_HTML, USER_INFO_HTML

BOOK_HTML = (
    '<html><body>'
    '<div id="detail_info"><div id="email">abc@abc.com</div><a href="https://abc.com/">home</a></div>'
    '<div id="book_info"><div id="isn">123456</div><div id="price">178.55</div>'
    '<div id="stock" data-available="true">yes</div></div>'
    '</body></html>'
)


@pytest.fixture
def extractor():
    return TemplateExtractor()


class TestExtraction:
    """Test suite for template-driven extraction."""

    def test_single_record(self, extractor, user_info_template):
        result = extractor.extract(USER_INFO_HTML, [user_info_template])
        assert result == [ExtractedObject(
            object_id="user-info",
            records=[{"email": "abc@abc.com", "phone-number": "13344445555"}],
        )]

    def test_multiple_records_in_document_order(self, extractor, user_info_template):
        result = extractor.extract(TWO_USERS_HTML, [user_info_template])
        assert [r["email"] for r in result[0].records] == ["abc@abc.com", "def@abc.com"]
        assert [r["phone-number"] for r in result[0].records] == ["13344445555", "23344445555"]

    def test_multiple_objects_in_template_order(self, extractor, mixed_templates):
        result = extractor.extract(BOOK_HTML, list(reversed(mixed_templates)))
        assert [obj.object_id for obj in result] == ["book-info", "detail-info"]

    def test_typed_values_and_sources(self, extractor, mixed_templates):
        detail, book = extractor.extract(BOOK_HTML, mixed_templates)
        assert detail.records == [{"email": "abc@abc.com", "homepage": "https://abc.com/"}]
        assert book.records == [{"isn": 123456, "price": 178.55, "in-stock": True}]

    def test_attribute_source_is_not_text(self, extractor):
        template = ObjectTemplate(
            object_id="user-info",
            css_selector="div#user_info",
            properties=[PropertyTemplate(id="link", css_selector="a",
                                         value_type=ValueType.STRING,
                                         value_from=AttributeSource(attribute="href"))],
        )
        html = ('<html><head></head><body><div id="user_info"><a href="mail_to:abc@abc.com">abc@abc.com</div>'
                '<div id="phone_number">13344445555</div></div></body></html>')
        result = extractor.extract(html, [template])
        assert result[0].records == [{"link": "mail_to:abc@abc.com"}]

    def test_inner_text_keeps_markup(self, extractor):
        template = ObjectTemplate(
            object_id="post",
            css_selector="article",
            properties=[PropertyTemplate(id="body", css_selector="div.body",
                                         value_type=ValueType.STRING)],
        )
        result = extractor.extract('<article><div class="body">Hello <b>world</b></div></article>', [template])
        assert result[0].records == [{"body": "Hello <b>world</b>"}]

    def test_no_match_yields_empty_records(self, extractor, user_info_template):
        result = extractor.extract("<html><body><p>nothing here</p></body></html>", [user_info_template])
        assert result == [ExtractedObject(object_id="user-info", records=[])]

    def test_every_property_has_a_key(self, extractor):
        template = ObjectTemplate(
            object_id="item",
            css_selector="li",
            properties=[
                PropertyTemplate(id="name", css_selector="span.name", value_type=ValueType.STRING),
                PropertyTemplate(id="count", css_selector="span.count", value_type=ValueType.INTEGER),
                PropertyTemplate(id="ratio", css_selector="span.ratio", value_type=ValueType.FLOAT),
                PropertyTemplate(id="flag", css_selector="span.flag", value_type=ValueType.BOOLEAN),
                PropertyTemplate(id="link", css_selector="a", value_type=ValueType.STRING,
                                 value_from=AttributeSource(attribute="href")),
            ],
        )
        html = '<ul><li><span class="name">a</span><a>no href</a></li><li></li></ul>'
        records = extractor.extract(html, [template])[0].records
        assert len(records) == 2
        for record in records:
            assert list(record) == ["name", "count", "ratio", "flag", "link"]
        assert records[0] == {"name": "a", "count": UNAVAILABLE, "ratio": UNAVAILABLE,
                              "flag": UNAVAILABLE, "link": ""}
        assert records[1] == {"name": "", "count": UNAVAILABLE, "ratio": UNAVAILABLE,
                              "flag": UNAVAILABLE, "link": ""}

    def test_malformed_values_degrade(self, extractor):
        template = ObjectTemplate(
            object_id="book",
            css_selector="div.book",
            properties=[
                PropertyTemplate(id="price", css_selector=".price", value_type=ValueType.FLOAT),
                PropertyTemplate(id="pages", css_selector=".pages", value_type=ValueType.INTEGER),
            ],
        )
        html = '<div class="book"><span class="price">$10</span><span class="pages">320</span></div>'
        assert extractor.extract(html, [template])[0].records == [{"price": UNAVAILABLE, "pages": 320}]

    def test_property_selectors_are_scoped(self, extractor):
        template = ObjectTemplate(
            object_id="card",
            css_selector="div.card",
            properties=[PropertyTemplate(id="title", css_selector="h2", value_type=ValueType.STRING)],
        )
        html = '<h2>page title</h2><div class="card"></div><div class="card"><h2>second</h2></div><h2>footer</h2>'
        records = extractor.extract(html, [template])[0].records
        assert records == [{"title": ""}, {"title": "second"}]

    def test_duplicate_property_ids_last_write_wins(self, extractor):
        template = ObjectTemplate(
            object_id="user-info",
            css_selector="div#user_info",
            properties=[
                PropertyTemplate(id="contact", css_selector="div#email", value_type=ValueType.STRING),
                PropertyTemplate(id="contact", css_selector="div#phone_number", value_type=ValueType.STRING),
            ],
        )
        records = extractor.extract(USER_INFO_HTML, [template])[0].records
        assert records == [{"contact": "13344445555"}]

    def test_invalid_object_selector_aborts(self, extractor, user_info_template):
        broken = ObjectTemplate(object_id="broken", css_selector="div[[", properties=[])
        with pytest.raises(SelectorCompileError):
            extractor.extract(USER_INFO_HTML, [user_info_template, broken])

    def test_invalid_property_selector_aborts(self, extractor):
        template = ObjectTemplate(
            object_id="user-info",
            css_selector="div#user_info",
            properties=[PropertyTemplate(id="email", css_selector="div#email >",
                                         value_type=ValueType.STRING)],
        )
        with pytest.raises(SelectorCompileError) as exc_info:
            extractor.extract(USER_INFO_HTML, [template])
        assert exc_info.value.selector == "div#email >"

    def test_to_dict(self, extractor, email_template):
        result = extractor.extract(USER_INFO_HTML, [email_template])
        assert result[0].to_dict() == {"object_id": "user-info", "records": [{"email": "abc@abc.com"}]}


class TestExtractTo:
    """Test suite for one-shot extraction and rendering."""

    def test_json(self, extractor, email_template):
        text = extractor.extract_to(
            '<div id="user_info"><div id="email">abc@abc.com</div></div>',
            [email_template],
            OutputFormat.JSON,
        )
        assert text == '[{"object_id":"user-info","records":[{"email":"abc@abc.com"}]}]'

    def test_text(self, extractor, email_template):
        assert extractor.extract_to(USER_INFO_HTML, [email_template], OutputFormat.TEXT) == "abc@abc.com"

    def test_text_without_matches(self, extractor, email_template):
        assert extractor.extract_to("<p></p>", [email_template], OutputFormat.TEXT) == ""
        assert extractor.extract_to("<p></p>", [], OutputFormat.TEXT) == ""

    def test_default_format_is_yaml(self, extractor, email_template):
        assert extractor.extract_to(USER_INFO_HTML, [email_template]).startswith("---")
