import pytest

from evalbench.core.reference_evaluator import EvaluationError, evaluate


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("1 + 2", "3"),
        ("-5 * 3", "-15"),
        ("7 / 2", "3"),
        ("-7 / 2", "-3"),
        ("true", "true"),
        ("!true", "false"),
        ("!5", "false"),
        ("!!5", "true"),
        ("!-5", "false"),
        ("1 < 2", "true"),
        ("3 != 3", "false"),
        ("1 < 2 == true", "true"),
        ("(1 < 2) != false", "true"),
        ("1 + 1; 10 * 10", "100"),
        ("", ""),
    ],
)
def test_evaluate_integer_and_boolean_expressions(source: str, expected: str) -> None:
    assert evaluate(source) == expected


@pytest.mark.parametrize(
    "source",
    ["((", "1 / 0", "true + 1", "-true", "\"text\"", "foo(1)", "true < false", "~1", "5 % 2"],
)
def test_evaluate_rejects_what_it_does_not_understand(source: str) -> None:
    with pytest.raises(EvaluationError):
        evaluate(source)


@pytest.mark.parametrize(
    "source",
    [
        "True",
        "False",
        # bang binds tighter than +, so this adds a boolean to an integer
        "!1 + 2",
        # comparisons apply left to right: (1 < 2) < 3 compares a boolean with an integer
        "1 < 2 < 3",
        "1 == true",
    ],
)
def test_evaluate_follows_monkey_rules_over_python_grammar(source: str) -> None:
    with pytest.raises(EvaluationError):
        evaluate(source)
