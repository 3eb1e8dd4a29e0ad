"""
Field declarations for the Google Contacts node.
"""

from __future__ import annotations

from flownodes.integrations.google_contacts.schemas import ALL_PERSON_FIELDS, SortOrder
from flownodes.nodes.base import (
    NodeProperty,
    PropertyGroup,
    PropertyOption,
    PropertyType,
)

DEFAULT_LIMIT = 100
MAX_LIMIT = 2000


def _show(*operations: str) -> dict[str, tuple[str, ...]]:
    return {"resource": ("contact",), "operation": operations}


def _text(display_name: str, name: str, description: str | None = None) -> NodeProperty:
    return NodeProperty(
        display_name=display_name,
        name=name,
        type=PropertyType.STRING,
        default="",
        description=description,
    )


def _typed_value_group(name: str, display_name: str, value_label: str) -> PropertyGroup:
    return PropertyGroup(
        name=name,
        display_name=display_name,
        values=(
            NodeProperty(
                display_name="Type",
                name="type",
                type=PropertyType.OPTIONS,
                default="",
                options=(
                    PropertyOption("Home", "home"),
                    PropertyOption("Work", "work"),
                    PropertyOption("Other", "other"),
                ),
            ),
            _text(value_label, "value"),
        ),
    )


def _multiple(display_name: str, name: str, group: PropertyGroup) -> NodeProperty:
    return NodeProperty(
        display_name=display_name,
        name=name,
        type=PropertyType.FIXED_COLLECTION,
        default={},
        placeholder=f"Add {display_name}",
        type_options={"multipleValues": True},
        options=(group,),
    )


PERSON_FIELD_OPTIONS = (
    PropertyOption("*", "*"),
    *(PropertyOption(field[0].upper() + field[1:], field) for field in ALL_PERSON_FIELDS),
)

CONTACT_PROPERTIES: tuple[NodeProperty, ...] = (
    NodeProperty(
        display_name="Operation",
        name="operation",
        type=PropertyType.OPTIONS,
        default="create",
        description="The operation to perform.",
        show={"resource": ("contact",)},
        options=(
            PropertyOption("Create", "create", "Create a contact"),
            PropertyOption("Delete", "delete", "Delete a contact"),
            PropertyOption("Get", "get", "Get a contact"),
            PropertyOption("Get All", "getAll", "Retrieve all contacts"),
        ),
    ),
    # ---------------------------------------------------------------- create
    NodeProperty(
        display_name="Family Name",
        name="familyName",
        type=PropertyType.STRING,
        default="",
        show=_show("create"),
    ),
    NodeProperty(
        display_name="Given Name",
        name="givenName",
        type=PropertyType.STRING,
        default="",
        show=_show("create"),
    ),
    NodeProperty(
        display_name="Additional Fields",
        name="additionalFields",
        type=PropertyType.COLLECTION,
        default={},
        placeholder="Add Field",
        show=_show("create"),
        options=(
            _multiple(
                "Addresses",
                "addressesUi",
                PropertyGroup(
                    name="addressesValues",
                    display_name="Address",
                    values=(
                        _text("Street Address", "streetAddress"),
                        _text("City", "city"),
                        _text("Region", "region"),
                        _text("Country Code", "countryCode"),
                        _text("Postal Code", "postalCode"),
                        NodeProperty(
                            display_name="Type",
                            name="type",
                            type=PropertyType.OPTIONS,
                            default="",
                            options=(
                                PropertyOption("Home", "home"),
                                PropertyOption("Work", "work"),
                                PropertyOption("Other", "other"),
                            ),
                        ),
                    ),
                ),
            ),
            NodeProperty(
                display_name="Birthday",
                name="birthday",
                type=PropertyType.DATE_TIME,
                default="",
            ),
            _multiple(
                "Company",
                "companyUi",
                PropertyGroup(
                    name="companyValues",
                    display_name="Company",
                    values=(
                        NodeProperty(
                            display_name="Current",
                            name="current",
                            type=PropertyType.BOOLEAN,
                            default=False,
                        ),
                        _text("Domain", "domain"),
                        _text("Name", "name"),
                        _text("Title", "title"),
                    ),
                ),
            ),
            _multiple(
                "Custom Fields",
                "customFieldsUi",
                PropertyGroup(
                    name="customFieldsValues",
                    display_name="Custom Field",
                    values=(
                        _text("Key", "key", "The end user specified key of the user defined data."),
                        _text("Value", "value", "The end user specified value of the user defined data."),
                    ),
                ),
            ),
            _multiple("Emails", "emailsUi", _typed_value_group("emailsValues", "Email", "Value")),
            _multiple(
                "Events",
                "eventsUi",
                PropertyGroup(
                    name="eventsValues",
                    display_name="Event",
                    values=(
                        NodeProperty(
                            display_name="Date",
                            name="date",
                            type=PropertyType.DATE_TIME,
                            default="",
                            description="The date of the event.",
                        ),
                        NodeProperty(
                            display_name="Type",
                            name="type",
                            type=PropertyType.OPTIONS,
                            default="",
                            options=(
                                PropertyOption("Anniversary", "anniversary"),
                                PropertyOption("Other", "other"),
                            ),
                        ),
                    ),
                ),
            ),
            NodeProperty(
                display_name="Group",
                name="group",
                type=PropertyType.MULTI_OPTIONS,
                default=[],
                type_options={"loadOptionsMethod": "getGroups"},
            ),
            _text("Middle Name", "middleName"),
            NodeProperty(
                display_name="Notes",
                name="biographies",
                type=PropertyType.STRING,
                default="",
                type_options={"alwaysOpenEditWindow": True},
            ),
            _multiple(
                "Phone",
                "phoneUi",
                _typed_value_group("phoneValues", "Phone", "Value"),
            ),
            _multiple(
                "Relations",
                "relationsUi",
                PropertyGroup(
                    name="relationsValues",
                    display_name="Relation",
                    values=(
                        _text("Person", "person", "The name of the other person this relation refers to."),
                        NodeProperty(
                            display_name="Type",
                            name="type",
                            type=PropertyType.OPTIONS,
                            default="",
                            options=tuple(
                                PropertyOption(label, label[0].lower() + label[1:].replace(" ", ""))
                                for label in (
                                    "Assistant",
                                    "Brother",
                                    "Child",
                                    "Domestic Partner",
                                    "Father",
                                    "Friend",
                                    "Manager",
                                    "Mother",
                                    "Parent",
                                    "Referred By",
                                    "Relative",
                                    "Sister",
                                    "Spouse",
                                )
                            ),
                        ),
                    ),
                ),
            ),
        ),
    ),
    # ------------------------------------------------------- delete / get
    NodeProperty(
        display_name="Contact ID",
        name="contactId",
        type=PropertyType.STRING,
        default="",
        required=True,
        show=_show("delete", "get"),
    ),
    NodeProperty(
        display_name="Fields",
        name="fields",
        type=PropertyType.MULTI_OPTIONS,
        default=[],
        required=True,
        description="A field mask to restrict which fields on each person are returned.",
        show=_show("get", "getAll"),
        options=PERSON_FIELD_OPTIONS,
    ),
    # ---------------------------------------------------------------- getAll
    NodeProperty(
        display_name="Return All",
        name="returnAll",
        type=PropertyType.BOOLEAN,
        default=False,
        description="If all results should be returned or only up to a given limit.",
        show=_show("getAll"),
    ),
    NodeProperty(
        display_name="Limit",
        name="limit",
        type=PropertyType.NUMBER,
        default=DEFAULT_LIMIT,
        description="How many results to return.",
        type_options={"minValue": 1, "maxValue": MAX_LIMIT},
        show={"resource": ("contact",), "operation": ("getAll",), "returnAll": (False,)},
    ),
    NodeProperty(
        display_name="Options",
        name="options",
        type=PropertyType.COLLECTION,
        default={},
        placeholder="Add Option",
        show=_show("getAll"),
        options=(
            NodeProperty(
                display_name="Sort Order",
                name="sortOrder",
                type=PropertyType.OPTIONS,
                default="",
                description="The order of the contacts returned in the result.",
                options=(
                    PropertyOption("Last Modified Ascending", SortOrder.LAST_MODIFIED_ASCENDING.value),
                    PropertyOption("Last Modified Descending", SortOrder.LAST_MODIFIED_DESCENDING.value),
                    PropertyOption("First Name Ascending", SortOrder.FIRST_NAME_ASCENDING.value),
                    PropertyOption("Last Name Ascending", SortOrder.LAST_NAME_ASCENDING.value),
                ),
            ),
        ),
    ),
)
