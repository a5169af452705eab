"""Step definitions for the Text Box feature."""

from behave import given, then, when

from core.models import TextBoxFormData
from core.test_data import TestData
from pages.text_box import TextBoxPage
from utils.polling import poll


def _page(context) -> TextBoxPage:
    pages = context.state.pages
    if "text_box" not in pages:
        pages["text_box"] = TextBoxPage(context.page, context.settings)
    return pages["text_box"]


def _run(context, awaitable):
    return context.lifecycle.run(awaitable)


def _await_state(context, probe, expected, description: str):
    poll_settings = context.settings.poll_settings
    return _run(
        context,
        poll(
            probe,
            lambda value: value == expected,
            timeout_ms=poll_settings["timeout_ms"],
            interval_ms=poll_settings["interval_ms"],
            expected=expected,
            description=description,
        ),
    )


def _await_output(context):
    return _await_state(context, _page(context).is_output_displayed, True, "output section displayed")


@given("I navigate to DemoQA Text Box page")
def step_navigate_text_box(context):
    page = _page(context)
    _run(context, page.navigate())
    assert page.is_at_path(), f"Expected Text Box URL, got {page.current_url}"


@when("I fill in the form with the following details:")
def step_fill_form(context):
    data = {context.table.headings[0]: context.table.headings[1]}
    data.update({row.cells[0]: row.cells[1] for row in context.table})
    _run(context, _page(context).fill_complete_form(TextBoxFormData.from_display_names(data)))


@when('I fill in the form with the "{user}" user')
def step_fill_form_with_user(context, user):
    _run(context, _page(context).fill_complete_form(TestData().user(user)))


@when('I enter "{value}" in the {field} field')
def step_enter_field(context, value, field):
    _run(context, _page(context).fill_field(field, value))


@when("I enter the following in {field}:")
def step_enter_multiline(context, field):
    _run(context, _page(context).fill_field(field, context.text))


@when("I click the Submit button")
def step_click_submit(context):
    _run(context, _page(context).click_submit())


@when("I clear the Full Name field")
def step_clear_full_name(context):
    _run(context, _page(context).fill_full_name(""))


@then("the output section should be displayed")
def step_output_displayed(context):
    _await_output(context).check()


@then("the output section should not be displayed")
def step_output_not_displayed(context):
    assert not _run(context, _page(context).is_output_displayed()), "Output section is displayed"


@then('the output should contain "{expected}"')
def step_output_contains(context, expected):
    _await_output(context).check()
    output = _run(context, _page(context).output_text())
    assert expected in output, f"Expected output to contain {expected!r}, got {output!r}"


@then("the email field should show validation error")
def step_email_invalid(context):
    _await_state(context, _page(context).email_validation_state, "invalid", "email validation state").check()


@then("the Text Box form should be visible")
def step_form_visible(context):
    assert _run(context, _page(context).is_form_loaded()), "Text Box form is not visible"


@then('the page title should contain "{expected}"')
def step_title_contains(context, expected):
    title = _run(context, _page(context).page_title())
    assert expected in title, f"Expected title to contain {expected!r}, got {title!r}"


@then('the "{field}" field should be empty')
def step_field_empty(context, field):
    assert _run(context, _page(context).is_field_empty(field)), f"{field} field is not empty"


@then("the output should display all submitted information correctly")
def step_output_complete(context):
    _await_output(context).check()
    page = _page(context)
    assert _run(context, page.output_value("name")), "Name missing from output"
    assert _run(context, page.output_value("email")), "Email missing from output"
