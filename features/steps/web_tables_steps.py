"""Step definitions for the Web Tables feature.

Every read of table state after an add, edit or delete goes through the poll
primitive; a poll that times out fails the step with the expected and last
observed values.
"""

from behave import given, then, when

from core.models import WebTableRecord, display_to_field_updates, missing_records
from core.test_data import TestData
from pages.web_table import WebTablePage


def _page(context) -> WebTablePage:
    pages = context.state.pages
    if "web_table" not in pages:
        pages["web_table"] = WebTablePage(context.page, context.settings)
    return pages["web_table"]


def _run(context, awaitable):
    return context.lifecycle.run(awaitable)


def _snapshot_row_count(context):
    context.state.row_count_before = _run(context, _page(context).table.count_data_rows())


def _expect_rows_added(context, added):
    assert context.state.row_count_before is not None, "Row count was not captured before the records were submitted"
    expected = context.state.row_count_before + added
    _run(context, _page(context).table.await_row_count(expected)).check()


def _records_from_table(context):
    return [WebTableRecord.from_display_names(row.as_dict()) for row in context.table]


def _submit_records(context, records):
    _snapshot_row_count(context)
    page = _page(context)
    for record in records:
        _run(context, page.add_record(record))
    context.state.added_records = list(records)


def _edit_record(context, name):
    updates = display_to_field_updates({row[0]: row[1] for row in _key_value_rows(context)})
    page = _page(context)
    _run(context, page.click_edit_for_row(name))
    _run(context, page.update_fields(updates))
    _run(context, page.click_button("submit"))


def _await_cell(context, name, column, value):
    """Wait for the row to render, then for the cell to settle on value."""
    table = _page(context).table
    _run(context, table.await_rows_matching(name)).check()
    _run(
        context,
        table.await_predicate(lambda: table.get_cell_value(name, column), expected=value, description=f"{column} for {name!r}"),
    ).check()


def _key_value_rows(context):
    """Two-column data table (field | value); behave treats the first row as the heading."""
    rows = [tuple(context.table.headings)]
    rows += [tuple(row.cells) for row in context.table]
    return rows


# ============================================
# Background
# ============================================


@given("I navigate to DemoQA Web Tables page")
def step_navigate_web_tables(context):
    page = _page(context)
    _run(context, page.navigate())
    assert page.is_at_path(), f"Expected Web Tables URL, got {page.current_url}"


# ============================================
# Add operations
# ============================================


@when("I click on the Add button")
def step_click_add(context):
    _run(context, _page(context).click_button("Add"))


@when("I fill in the registration form with the following details:")
def step_fill_registration_form(context):
    data = dict(_key_value_rows(context))
    _run(context, _page(context).fill_registration_form(WebTableRecord.from_display_names(data)))


@when("I click the Submit button in registration form")
def step_click_submit_registration(context):
    _snapshot_row_count(context)
    _run(context, _page(context).click_button("Submit"))


@when("I add the following records to the table:")
def step_add_records(context):
    _submit_records(context, _records_from_table(context))


@when('I add a new record with first name "{first_name}" and last name "{last_name}"')
def step_add_named_record(context, first_name, last_name):
    record = TestData().record().model_copy(update={"first_name": first_name, "last_name": last_name})
    _submit_records(context, [record])


@when("I add {count:d} records to the table")
def step_add_n_records(context, count):
    base = TestData().record()
    records = [
        base.model_copy(update={"first_name": f"{base.first_name}{n}", "email": f"user{n}.{base.email}"})
        for n in range(1, count + 1)
    ]
    _submit_records(context, records)


@when("I add a new record to the table")
def step_add_default_record(context):
    _submit_records(context, [TestData().record()])


# ============================================
# Edit operations
# ============================================


@when('I edit the record for "{name}" with:')
def step_edit_record(context, name):
    _edit_record(context, name)


@when('I update the record for "{name}" with:')
def step_update_record(context, name):
    _edit_record(context, name)


@when('I update the Email field to "{email}"')
def step_update_email(context, email):
    _run(context, _page(context).update_fields({"email": email}))


@when('I update the Age field to "{age}"')
def step_update_age(context, age):
    _run(context, _page(context).update_fields({"age": age}))


@when('I search for "{term}"')
def step_search(context, term):
    _run(context, _page(context).search_for(term))


# ============================================
# Delete operations
# ============================================


@when('I click the delete button for "{name}"')
def step_delete_record(context, name):
    _snapshot_row_count(context)
    _run(context, _page(context).click_delete_for_row(name))


@when("I delete the following records:")
def step_delete_records(context):
    names = [row.cells[0] for row in context.table if row.cells and row.cells[0]]
    _snapshot_row_count(context)
    page = _page(context)
    for name in names:
        _run(context, page.click_delete_for_row(name))
    context.state.deleted_names = names


# ============================================
# Then - record verification
# ============================================


@then("the new record should be added to the table")
def step_new_record_added(context):
    _expect_rows_added(context, 1)


@then("the table should contain all added records")
def step_all_records_added(context):
    _expect_rows_added(context, len(context.state.added_records))


@then('the table should contain "{text}"')
@then('the table should display "{text}"')
def step_table_contains(context, text):
    table = _page(context).table
    _run(context, table.await_predicate(lambda: table.table_contains(text), description=f"table contains {text!r}")).check()


@then('the table should not contain "{text}"')
def step_table_not_contains(context, text):
    _run(context, _page(context).table.await_rows_matching(text, expected_count=0)).check()


@then("the deleted records should no longer be in the table")
def step_deleted_records_gone(context):
    table = _page(context).table
    for name in context.state.deleted_names:
        _run(context, table.await_rows_matching(name, expected_count=0)).check()


@then('the table should show only one record with "{text}"')
def step_single_record(context, text):
    _run(context, _page(context).table.await_rows_matching(text, expected_count=1)).check()


@then("the table should contain the following records:")
def step_table_contains_records(context):
    expected = _records_from_table(context)
    table = _page(context).table

    async def missing():
        return missing_records(expected, await table.extract_all_records())

    _run(context, table.await_predicate(missing, expected=[], description="records missing from table")).check()


@then("the record should be updated in the table")
def step_record_updated(context):
    page = _page(context)
    _run(context, page.table.await_predicate(page.is_form_closed, description="registration form closed")).check()
    assert _run(context, page.is_item_visible("table")), "Table is not visible"


@then('the table should show updated values for "{name}":')
@when('the table should show updated values for "{name}":')
def step_updated_values(context, name):
    for column, value in _key_value_rows(context):
        _await_cell(context, name, column, value)


@then('the table should show "{column}" as "{value}" for "{name}"')
def step_cell_value(context, column, value, name):
    _await_cell(context, name, column, value)


@then('each data row should have a "{kind}" button')
def step_rows_have_action(context, kind):
    assert _run(context, _page(context).each_data_row_has_action(kind)), f"Not every data row has a {kind} button"


@then('the "{item}" should be visible')
def step_item_visible(context, item):
    assert _run(context, _page(context).is_item_visible(item)), f"{item} is not visible"
