"""Step definitions for the Radio Button feature."""

from behave import given, then, when

from pages.radio_button import RadioButtonPage


def _page(context) -> RadioButtonPage:
    pages = context.state.pages
    if "radio_button" not in pages:
        pages["radio_button"] = RadioButtonPage(context.page, context.settings)
    return pages["radio_button"]


def _run(context, awaitable):
    return context.lifecycle.run(awaitable)


@given("I navigate to DemoQA Radio Button page")
def step_navigate_radio(context):
    page = _page(context)
    _run(context, page.navigate())
    assert page.is_at_path(), f"Expected Radio Button URL, got {page.current_url}"


@when('I click on "{option}" radio button')
def step_click_radio(context, option):
    _run(context, _page(context).select(option))


@when('I try to click on "{option}" radio button')
def step_try_click_radio(context, option):
    page = _page(context)
    # Clicking a disabled option is a no-op
    if not _run(context, page.is_disabled(option)):
        _run(context, page.select(option))


@then('the "{option}" radio button should be selected')
def step_radio_selected(context, option):
    assert _run(context, _page(context).is_selected(option)), f"{option} is not selected"


@then('the "{option}" radio button should be disabled')
def step_radio_disabled(context, option):
    assert _run(context, _page(context).is_disabled(option)), f"{option} is not disabled"


@then('the output text should be "{expected}"')
def step_output_text(context, expected):
    actual = _run(context, _page(context).output_message())
    assert actual == expected, f"Expected output {expected!r}, got {actual!r}"


@then("no selection should change")
def step_no_selection(context):
    page = _page(context)
    for option in ("Yes", "Impressive", "No"):
        assert not _run(context, page.is_selected(option)), f"{option} became selected"


@then("the output should not change")
def step_output_unchanged(context):
    assert not _run(context, _page(context).is_output_visible()), "Output message appeared"
