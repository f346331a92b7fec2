from textwrap import dedent

from behave import given, then, when

from features.steps.discover_env import DiscoverContext


@given("a new project")
def step_new_project(context: DiscoverContext):
    context.discover.project_files["pyproject.toml"] = dedent(
        """
        [tool.poetry]
        name = "project"
        version = "0.1.0"
        """
    ).lstrip()


@given('the feature file "{rel_path}"')
def step_feature_file(context: DiscoverContext, rel_path: str):
    context.discover.project_files[rel_path] = context.text + "\n"


@given("the discovery configuration")
def step_discovery_configuration(context: DiscoverContext):
    context.discover.project_files["pyproject.toml"] += "\n[tool.discovery]\n" + context.text + "\n"


@when('I run discover with "{args}"')
def step_run_discover(context: DiscoverContext, args: str):
    context.result = context.discover.run(*args.split())


@when("I run discover with no arguments")
def step_run_discover_no_args(context: DiscoverContext):
    context.result = context.discover.run()


@then("the exit code is {exit_code}")
def step_exit_code(context: DiscoverContext, exit_code: str):
    assert context.result
    assert context.result.exit_code == int(exit_code), context.result.output


@then("the output is")
def step_output_is(context: DiscoverContext):
    assert context.result
    assert context.result.output.strip() == context.text.strip(), context.result.output


@then('the output contains "{message}"')
def step_output_contains_message(context: DiscoverContext, message: str):
    assert context.result
    assert message in context.result.output, context.result.output


@then('the output does not contain "{message}"')
def step_output_does_not_contain_message(context: DiscoverContext, message: str):
    assert context.result
    assert message not in context.result.output, context.result.output
