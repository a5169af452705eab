"""Smoke steps against the Demoblaze storefront homepage."""

from behave import given, then


@given("I open the Demoblaze homepage")
def step_open_homepage(context):
    context.lifecycle.run(context.page.goto(context.settings.get("homepage_url")))


@then('I should see the title "{expected}"')
def step_title_is(context, expected):
    actual = context.lifecycle.run(context.page.title())
    assert actual == expected, f"Expected title {expected!r}, got {actual!r}"
