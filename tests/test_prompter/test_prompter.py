"""Tests for the Prompter ask loop, confirmation, and gathering."""

from __future__ import annotations

import re

import pytest

from promptline.config import PromptConfig
from promptline.errors import InvalidTypeError
from promptline.model.question import REPEAT_QUESTION, Question
from promptline.prompter import Prompter
from promptline.providers.scripted import ScriptedInput


def _prompter(answers: object, **config: object) -> tuple[Prompter, ScriptedInput]:
    provider = ScriptedInput(answers)  # type: ignore[arg-type]
    return Prompter(provider, config=PromptConfig(**config)), provider  # type: ignore[arg-type]


# ===========================================================================
# Single answers
# ===========================================================================


class TestAsk:
    def test_string_answer_is_stripped(self) -> None:
        prompter, provider = _prompter(["  Ada  "])

        assert prompter.ask("Name? ") == "Ada"
        assert provider.output() == "Name? "

    def test_integer_retries_after_invalid_type(self) -> None:
        prompter, provider = _prompter(["abc", "42"])

        assert prompter.ask("Age? ", int) == 42
        assert "You must enter a valid integer.\n?  " in provider.output()

    def test_range_retry(self) -> None:
        prompter, provider = _prompter(["0", "11", "5"])

        assert prompter.ask("N? ", int, above=0, below=10) == 5
        assert provider.output().count(
            "Your answer isn't within the expected range (above 0 and below 10)."
        ) == 2

    def test_validator_retry(self) -> None:
        prompter, provider = _prompter(["abc", "123"])

        assert prompter.ask("Zip? ", validator=r"^\d+$") == "123"
        assert r"Your answer isn't valid (must match /^\d+$/)." in provider.output()

    def test_validator_with_template_syntax_is_written_literally(self) -> None:
        prompter, provider = _prompter(["a{b", "ab"])

        assert prompter.ask("Word? ", validator=r"^[^{#]+$") == "ab"
        assert "Your answer isn't valid (must match /^[^{#]+$/)." in provider.output()

    def test_choices_with_template_syntax_are_written_literally(self) -> None:
        prompter, provider = _prompter(["q", "{#y"])

        assert prompter.ask("Pick? ", ["{{x}}", "{#y"]) == "{#y"
        assert "You must choose one of [{{x}}, {#y]." in provider.output()

    def test_answer_with_template_syntax_is_not_rendered(self) -> None:
        prompter, provider = _prompter(["{{ 7 * 7 }}"])

        assert prompter.ask("Expr? ") == "{{ 7 * 7 }}"
        assert provider.output() == "Expr? "

    def test_predicate_validator(self) -> None:
        prompter, _ = _prompter(["lower", "UPPER"])
        assert prompter.ask("Shout: ", validator=str.isupper) == "UPPER"

    def test_default_used_for_empty_answer(self) -> None:
        prompter, provider = _prompter([""])

        assert prompter.ask("Age? ", int, default="5") == 5
        assert provider.output() == "Age? |5| "

    def test_object_default_returned_as_is(self) -> None:
        import datetime

        default = datetime.date(2024, 1, 1)
        prompter, _ = _prompter([""])

        assert prompter.ask("When? ", datetime.date, default=default) is default

    def test_first_answer_skips_input(self) -> None:
        prompter, _ = _prompter([])
        assert prompter.ask("N? ", int, first_answer="7") == 7

    def test_rejected_first_answer_falls_back_to_input(self) -> None:
        prompter, _ = _prompter(["8"])
        assert prompter.ask("N? ", int, first_answer="x") == 8

    def test_choices_autocomplete(self) -> None:
        prompter, _ = _prompter(["gr"])
        assert prompter.ask("Color? ", ["red", "green", "blue"]) == "green"

    def test_no_completion_message(self) -> None:
        prompter, provider = _prompter(["x", "b"])

        assert prompter.ask("Color? ", ["red", "green", "blue"]) == "blue"
        assert "You must choose one of [red, green, blue]." in provider.output()

    def test_ambiguous_completion_message(self) -> None:
        prompter, provider = _prompter(["gr", "gree"])

        assert prompter.ask("Color? ", ["green", "grey"]) == "green"
        assert "Ambiguous choice.  Please choose one of [green, grey]." in provider.output()

    def test_case_normalization(self) -> None:
        prompter, _ = _prompter(["  new   york "])
        answer = prompter.ask("City? ", whitespace_mode="strip_and_collapse", case_mode="capitalize")
        assert answer == "New york"

    def test_config_whitespace_default(self) -> None:
        prompter, _ = _prompter(["  x  "], whitespace_mode="chomp")
        assert prompter.ask("? ") == "  x  "

    def test_character_mode(self) -> None:
        prompter, _ = _prompter("q")
        assert prompter.ask("Key? ", character=True) == "q"

    def test_ready_made_question(self) -> None:
        prompter, _ = _prompter(["3"])
        assert prompter.ask(Question("N? ", int)) == 3

    def test_template_is_rendered(self) -> None:
        prompter, provider = _prompter(["x"])
        prompter.ask("{{ 6 * 7 }}? ")
        assert provider.output() == "42? "

    def test_repeat_question_on_error(self) -> None:
        def configure(question: Question) -> None:
            question.responses["ask_on_error"] = REPEAT_QUESTION

        prompter, provider = _prompter(["x", "1"])

        assert prompter.ask("Number? ", int, configure) == 1
        assert provider.output().count("Number? ") == 2

    def test_answer_stored_on_question(self) -> None:
        prompter, _ = _prompter(["12"])
        question = Question("N? ", int)
        prompter.ask(question)
        assert question.answer == 12


class TestAttempts:
    def test_max_attempts_reraises(self) -> None:
        prompter, _ = _prompter(["a", "b", "c"], max_attempts=2)
        with pytest.raises(InvalidTypeError):
            prompter.ask("N? ", int)

    def test_end_of_input_propagates(self) -> None:
        prompter, _ = _prompter([])
        with pytest.raises(EOFError):
            prompter.ask("N? ")

    def test_end_of_input_after_rejection(self) -> None:
        prompter, _ = _prompter(["abc"])
        with pytest.raises(EOFError):
            prompter.ask("N? ", int)


# ===========================================================================
# Confirmation
# ===========================================================================


class TestConfirm:
    def test_confirm_true(self) -> None:
        prompter, provider = _prompter(["42", "no", "43", "yes"])

        assert prompter.ask("Number? ", int, confirm=True) == 43
        assert provider.output().count("Are you sure?  ") == 2

    def test_confirm_template_sees_answer(self) -> None:
        prompter, provider = _prompter(["7", "y"])

        assert prompter.ask("N? ", int, confirm="Really use {{ answer }}?  ") == 7
        assert "Really use 7?  " in provider.output()

    def test_confirm_template_shows_answer_literally(self) -> None:
        prompter, provider = _prompter(["{{ 7 * 7 }}", "y"])

        assert prompter.ask("Expr? ", confirm="Use {{ answer }}?  ") == "{{ 7 * 7 }}"
        assert "Use {{ 7 * 7 }}?  " in provider.output()
        assert "49" not in provider.output()

    def test_confirm_with_unbalanced_block_tag_in_answer(self) -> None:
        prompter, provider = _prompter(["{% broken", "n", "plain", "yes"])

        assert prompter.ask("Text? ", confirm="Keep {{ answer }}?  ") == "plain"
        assert "Keep {% broken?  " in provider.output()
        assert "Keep plain?  " in provider.output()

    def test_rejected_confirmation_repeats_with_answer(self) -> None:
        prompter, provider = _prompter(["7", "maybe", "y"])

        assert prompter.ask("N? ", int, confirm="Use {{ answer }}?  ") == 7
        assert 'Please enter "yes" or "no".\n?  ' in provider.output()

    def test_agree(self) -> None:
        assert _prompter(["yes"])[0].agree("Continue? ") is True
        assert _prompter(["n"])[0].agree("Continue? ") is False
        assert _prompter(["YES"])[0].agree("Continue? ") is True

    def test_agree_rejects_other_answers(self) -> None:
        prompter, provider = _prompter(["maybe", "y"])

        assert prompter.agree("Continue? ") is True
        assert 'Please enter "yes" or "no".' in provider.output()

    def test_agree_character(self) -> None:
        prompter, _ = _prompter("n")
        assert prompter.agree("Continue? ", character=True) is False

    def test_agree_character_discards_line_ending(self) -> None:
        prompter, _ = _prompter("y\nAda\n")

        assert prompter.agree("Continue? ", character=True) is True
        assert prompter.ask("Name? ") == "Ada"

    def test_agree_character_discards_crlf(self) -> None:
        prompter, _ = _prompter("n\r\nAda\r\n")

        assert prompter.agree("Continue? ", character=True) is False
        assert prompter.ask("Name? ") == "Ada"


# ===========================================================================
# Gathering
# ===========================================================================


class TestGather:
    def test_count(self) -> None:
        prompter, provider = _prompter(["a", "b", "c"])

        assert prompter.ask("Name? ", gather=3) == ["a", "b", "c"]
        assert provider.output().count("Name? ") == 1

    def test_count_converts_each_answer(self) -> None:
        prompter, _ = _prompter(["1", "x", "2"])
        assert prompter.ask("N? ", int, gather=2) == [1, 2]

    def test_string_terminator(self) -> None:
        prompter, _ = _prompter(["a", "b", ""])
        assert prompter.ask("Item? ", gather="") == ["a", "b"]

    def test_regex_terminator(self) -> None:
        prompter, _ = _prompter(["1", "2", "done"])
        assert prompter.ask("Item? ", gather=re.compile(r"^done$")) == ["1", "2"]

    def test_keyed(self) -> None:
        prompter, provider = _prompter(["36", "Ada"])

        answers = prompter.ask("{{ key }}? ", gather={"name": None, "age": None})

        assert answers == {"age": "36", "name": "Ada"}
        assert "age? " in provider.output()
        assert "name? " in provider.output()
        assert prompter.key is None

    def test_verify_match(self) -> None:
        prompter, provider = _prompter(["pw1", "pw2", "pw1", "pw1"])

        assert prompter.ask("Password: ", gather=2, verify_match=True) == "pw1"
        assert "Your entries didn't match." in provider.output()

    def test_template_restored(self) -> None:
        prompter, _ = _prompter(["a", "b"])
        question = Question("Name? ", gather=2)

        prompter.ask(question)

        assert question.template == "Name? "

    def test_gather_requires_mode(self) -> None:
        prompter, _ = _prompter([])
        with pytest.raises(ValueError):
            prompter.gather(Question("?"))


# ===========================================================================
# Output
# ===========================================================================


class TestSay:
    @pytest.mark.parametrize(
        ("statement", "written"),
        [("Hello", "Hello\n"), ("Hello ", "Hello "), ("Tab\t", "Tab\t"), ("Hi\n", "Hi\n"), ("", "")],
    )
    def test_line_handling(self, statement: str, written: str) -> None:
        prompter, provider = _prompter([])
        prompter.say(statement)
        assert provider.output() == written

    def test_renders_template(self) -> None:
        prompter, provider = _prompter([])
        prompter.say("{{ 1 + 1 }}")
        assert provider.output() == "2\n"
