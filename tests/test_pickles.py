from ly_test_discovery.document import parse_document
from ly_test_discovery.events import EventBroadcaster
from ly_test_discovery.model import GherkinDocument, Location, PickleString, PickleTable
from ly_test_discovery.pickles import PickleCompiler, compile_pickles, interpolate

URI = "features/test.feature"


def _pickles(*lines: str):
    return list(compile_pickles(parse_document("\n".join(lines), URI), URI))


def test_interpolate():
    assert interpolate("<a> and <b>", [("a", "1"), ("b", "2")]) == "1 and 2"
    assert interpolate("<a><a>", [("a", "x")]) == "xx"
    assert interpolate("<missing>", [("a", "1")]) == "<missing>"


def test_empty_document_has_no_pickles():
    assert list(compile_pickles(GherkinDocument(), URI)) == []


def test_feature_without_scenarios_has_no_pickles():
    assert _pickles("Feature: nothing here", "  Just a description.") == []


def test_scenarios_in_declaration_order():
    pickles = _pickles(
        "Feature: order",
        "  Scenario: first",
        "    Given one",
        "  Scenario: second",
        "    Given two",
    )
    assert [pickle.name for pickle in pickles] == ["first", "second"]
    assert all(pickle.uri == URI and pickle.language == "en" for pickle in pickles)
    assert pickles[1].locations == (Location(line=4, column=3),)


def test_step_location_points_past_the_keyword():
    (pickle,) = _pickles(
        "Feature: keywords",
        "  Scenario: columns",
        "    Given a context",
        "    And another",
        "    * a bullet",
    )
    assert [step.text for step in pickle.steps] == ["a context", "another", "a bullet"]
    assert [step.locations for step in pickle.steps] == [
        (Location(line=3, column=11),),
        (Location(line=4, column=9),),
        (Location(line=5, column=7),),
    ]


def test_backgrounds_and_tags_follow_their_scope():
    pickles = _pickles(
        "@feature",
        "Feature: rules",
        "  Background:",
        "    Given a feature background",
        "",
        "  Scenario: top level",
        "    When something happens",
        "",
        "  @rule",
        "  Rule: a rule",
        "",
        "    Background:",
        "      Given a rule background",
        "",
        "    @scenario",
        "    Scenario: inside the rule",
        "      Then it has both backgrounds",
        "",
        "  Rule: another rule",
        "",
        "    Scenario: only the feature background",
        "      Then it has one background",
    )

    assert [pickle.name for pickle in pickles] == [
        "top level",
        "inside the rule",
        "only the feature background",
    ]
    assert [step.text for step in pickles[0].steps] == [
        "a feature background",
        "something happens",
    ]
    assert [step.text for step in pickles[1].steps] == [
        "a feature background",
        "a rule background",
        "it has both backgrounds",
    ]
    assert [step.text for step in pickles[2].steps] == [
        "a feature background",
        "it has one background",
    ]
    assert pickles[0].tag_names == ("@feature",)
    assert pickles[1].tag_names == ("@feature", "@rule", "@scenario")
    assert pickles[2].tag_names == ("@feature",)
    assert pickles[1].tags[1].location == Location(line=9, column=3)


def test_tags_are_not_deduplicated():
    (pickle,) = _pickles("@smoke", "Feature: f", "  @smoke", "  Scenario: s", "    Given x")
    assert pickle.tag_names == ("@smoke", "@smoke")


def test_outline_expands_one_pickle_per_row():
    pickles = _pickles(
        "Feature: outlines",
        "  Scenario Outline: eat <eat> of <start>",
        "    Given there are <start> cucumbers",
        "    When I eat <eat> cucumbers",
        "    Then I should have <left> <unknown> cucumbers",
        "",
        "    Examples:",
        "      | start | eat | left |",
        "      | 12    | 5   | 7    |",
        "      | 20    | 5   | 15   |",
    )

    assert len(pickles) == 2
    assert [pickle.name for pickle in pickles] == ["eat 5 of 12", "eat 5 of 20"]
    assert pickles[0].locations == (Location(line=9, column=7), Location(line=2, column=3))
    assert pickles[1].locations == (Location(line=10, column=7), Location(line=2, column=3))
    assert [step.text for step in pickles[0].steps] == [
        "there are 12 cucumbers",
        "I eat 5 cucumbers",
        "I should have 7 <unknown> cucumbers",
    ]
    assert [step.text for step in pickles[1].steps] == [
        "there are 20 cucumbers",
        "I eat 5 cucumbers",
        "I should have 15 <unknown> cucumbers",
    ]
    assert pickles[1].steps[0].locations == (
        Location(line=3, column=11),
        Location(line=10, column=7),
    )


def test_outline_with_several_examples_and_tags():
    pickles = _pickles(
        "@feature",
        "Feature: outlines",
        "  Background:",
        "    Given a <value> background",
        "",
        "  @outline",
        "  Scenario Outline: <value>",
        "    Given <value>",
        "",
        "    @first",
        "    Examples: first",
        "      | value |",
        "      | a     |",
        "",
        "    Examples: second",
        "      | value |",
        "      | b     |",
        "      | c     |",
    )

    assert [pickle.name for pickle in pickles] == ["a", "b", "c"]
    assert pickles[0].tag_names == ("@feature", "@outline", "@first")
    assert pickles[1].tag_names == ("@feature", "@outline")
    # Background steps are not part of the outline.
    assert [step.text for step in pickles[2].steps] == ["a <value> background", "c"]
    assert pickles[2].steps[0].locations == (Location(line=4, column=11),)


def test_outline_substitutes_arguments():
    (pickle,) = _pickles(
        "Feature: arguments",
        "  Scenario Outline: with arguments",
        "    Given a document",
        '      """<type>',
        "      hello <who>",
        '      """',
        "    And a table",
        "      | name  |",
        "      | <who> |",
        "",
        "    Examples:",
        "      | who   | type |",
        "      | world | text |",
    )

    doc_string, table = (step.arguments[0] for step in pickle.steps)
    assert doc_string == PickleString(
        location=Location(line=4, column=7), content="hello world", content_type="text"
    )
    assert isinstance(table, PickleTable)
    assert [[cell.value for cell in row.cells] for row in table.rows] == [["name"], ["world"]]
    assert table.rows[1].cells[0].location == Location(line=9, column=9)


def test_plain_scenario_arguments():
    (pickle,) = _pickles(
        "Feature: arguments",
        "  Scenario: plain",
        "    Given a document",
        '      """',
        "      <not replaced>",
        '      """',
        "    Then nothing else",
    )
    assert pickle.steps[0].arguments == (
        PickleString(location=Location(line=4, column=7), content="<not replaced>"),
    )
    assert pickle.steps[1].arguments == ()


def test_duplicate_columns_use_the_leftmost_value():
    (pickle,) = _pickles(
        "Feature: duplicates",
        "  Scenario Outline: <x>",
        "    Given <x>",
        "    Examples:",
        "      | x | x |",
        "      | a | b |",
    )
    assert pickle.name == "a"


def test_examples_without_a_table_yield_nothing():
    assert (
        _pickles(
            "Feature: empty examples",
            "  Scenario Outline: <x>",
            "    Given <x>",
            "    Examples:",
        )
        == []
    )
    assert (
        _pickles(
            "Feature: header only",
            "  Scenario Outline: <x>",
            "    Given <x>",
            "    Examples:",
            "      | x |",
        )
        == []
    )


def test_outline_without_examples_is_a_plain_scenario():
    (pickle,) = _pickles("Feature: f", "  Scenario Outline: <x>", "    Given <x>")
    assert pickle.name == "<x>"
    assert pickle.locations == (Location(line=2, column=3),)


def test_compiler_publishes_each_pickle_before_yielding_it():
    document = parse_document("Feature: f\nScenario: a\nGiven x\nScenario: b\nGiven y", URI)
    broadcaster = EventBroadcaster()
    published = []
    broadcaster.on("pickle", published.append)

    pickles = PickleCompiler(broadcaster).compile(document, URI)
    first = next(pickles)
    assert [event.pickle for event in published] == [first]
    second = next(pickles)
    assert [event.pickle for event in published] == [first, second]
    assert list(pickles) == []
    assert all(event.uri == URI for event in published)
