from __future__ import annotations

from hb_cli.core.constants import FEEDBACK_PHRASES
from hb_cli.core.feedback import (
    compose_feedback,
    feedback_to_markdown,
    join_two_sentences,
    primary_and_secondary,
)
from hb_cli.core.models import Feedback


def test_join_two_sentences_pads_and_terminates() -> None:
    assert join_two_sentences(["First", "Second!"]) == "First. Second!"
    assert join_two_sentences(["Only one"], "Padding") == "Only one. Padding."
    assert join_two_sentences(["Only one."]) == "Only one."
    assert join_two_sentences([]) == ""


def test_primary_and_secondary() -> None:
    assert primary_and_secondary(["passing", "passing", "footwork"]) == ("passing", "footwork")
    assert primary_and_secondary(["shooting"]) == ("shooting", None)
    assert primary_and_secondary([]) == ("fundamentals", None)


def test_single_tag_uses_canned_text() -> None:
    feedback = compose_feedback(["shooting"])
    canned = FEEDBACK_PHRASES["shooting"]
    assert feedback.title == "Shooting"
    assert feedback.good == (" ".join(canned["good"]),)
    assert feedback.improve == (" ".join(canned["improve"]),)


def test_unknown_tag_uses_fundamentals_text_with_tag_title() -> None:
    feedback = compose_feedback(["ball-handling"])
    assert feedback.title == "Ball-handling"
    assert feedback.good == (" ".join(FEEDBACK_PHRASES["fundamentals"]["good"]),)


def test_empty_tags_fall_back_to_fundamentals() -> None:
    feedback = compose_feedback([])
    assert feedback.title == "Fundamentals"
    assert len(feedback.good) == 1


def test_classifier_sentences_replace_primary_text() -> None:
    feedback = compose_feedback(
        ["passing"],
        positives=["Quick release.", "Good balance.", "Ignored third."],
        improvements=["Step into the pass."],
    )
    assert feedback.good == ("Quick release. Good balance.",)
    second_canned = FEEDBACK_PHRASES["passing"]["improve"][1]
    assert feedback.improve == (f"Step into the pass. {second_canned}",)


def test_secondary_tag_adds_labelled_lines() -> None:
    feedback = compose_feedback(["feint", "defense"], positives=["Sharp cut."])
    assert feedback.title == "Feint · Defense"
    assert len(feedback.good) == 2
    assert feedback.good[0].startswith("Feint: Sharp cut. ")
    assert feedback.good[1] == "Defense: " + " ".join(FEEDBACK_PHRASES["defense"]["good"])
    assert feedback.improve[1].startswith("Defense: ")


def test_markdown_layout() -> None:
    markdown = feedback_to_markdown(Feedback(title="Passing", good=("Nice.",), improve=("Fix.",)))
    assert markdown == (
        "## Passing\n\n"
        "### Technical Feedback\n"
        "- **What's good**:\n  - Nice.\n"
        "- **What to improve**:\n  - Fix."
    )
