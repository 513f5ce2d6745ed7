import pytest

from html_extractor.config import AttributeSource, ObjectTemplate, PropertyTemplate, ValueType

USER_INFO_HTML = (
    '<html><head></head><body>'
    '<div id="user_info"><div id="email">abc@abc.com</div><div id="phone_number">13344445555</div></div>'
    '</body></html>'
)

TWO_USERS_HTML = (
    '<html><head></head><body>'
    '<div id="user_info"><div id="email">abc@abc.com</div><div id="phone_number">13344445555</div></div>'
    '<div id="user_info"><div id="email">def@abc.com</div><div id="phone_number">23344445555</div></div>'
    '</body></html>'
)


@pytest.fixture
def user_info_template():
    """Object template with email and phone number properties."""
    return ObjectTemplate(
        object_id="user-info",
        css_selector="div#user_info",
        properties=[
            PropertyTemplate(id="email", css_selector="div#email",
                             value_type=ValueType.STRING, value_from="InnerText"),
            PropertyTemplate(id="phone-number", css_selector="div#phone_number",
                             value_type=ValueType.STRING, value_from="InnerText"),
        ],
    )


@pytest.fixture
def email_template():
    """Object template with a single email property."""
    return ObjectTemplate(
        object_id="user-info",
        css_selector="div#user_info",
        properties=[
            PropertyTemplate(id="email", css_selector="div#email",
                             value_type=ValueType.STRING, value_from="InnerText"),
        ],
    )


@pytest.fixture
def mixed_templates():
    """Two object templates covering every value type and both sources."""
    return [
        ObjectTemplate(
            object_id="detail-info",
            css_selector="div#detail_info",
            properties=[
                PropertyTemplate(id="email", css_selector="div#email",
                                 value_type=ValueType.STRING, value_from="InnerText"),
                PropertyTemplate(id="homepage", css_selector="a",
                                 value_type=ValueType.STRING,
                                 value_from=AttributeSource(attribute="href")),
            ],
        ),
        ObjectTemplate(
            object_id="book-info",
            css_selector="div#book_info",
            properties=[
                PropertyTemplate(id="isn", css_selector="div#isn",
                                 value_type=ValueType.INTEGER, value_from="InnerText"),
                PropertyTemplate(id="price", css_selector="div#price",
                                 value_type=ValueType.FLOAT, value_from="InnerText"),
                PropertyTemplate(id="in-stock", css_selector="div#stock",
                                 value_type=ValueType.BOOLEAN,
                                 value_from=AttributeSource(attribute="data-available")),
            ],
        ),
    ]
