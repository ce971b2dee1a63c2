"""Tests for the questionnaire state machine."""

from __future__ import annotations

from mindlink.assessment import AssessmentSession, AssessmentStep


def _complete(session: AssessmentSession, scores) -> None:
    for score in scores:
        assert session.answer(score)
        session.advance()


def test_initial_state_is_selection():
    session = AssessmentSession()
    assert session.step == AssessmentStep.SELECTION
    assert session.answers == ()
    assert session.result() is None


def test_start_initializes_unset_answers():
    session = AssessmentSession()
    assert session.start("phq9")
    assert session.step == AssessmentStep.QUESTIONS
    assert session.answers == (None,) * 9
    assert session.current_index == 0
    assert session.current_question == session.definition.questions[0]


def test_start_unknown_instrument_is_rejected():
    session = AssessmentSession()
    assert not session.start("nope")
    assert session.step == AssessmentStep.SELECTION


def test_cannot_switch_instrument_mid_session():
    session = AssessmentSession()
    session.start("gad7")
    assert not session.start("phq9")
    assert session.definition.id.value == "gad7"


def test_answer_then_advance():
    session = AssessmentSession()
    session.start("gad7")
    session.answer(2)
    assert session.current_index == 0
    assert session.advance() == AssessmentStep.QUESTIONS
    assert session.current_index == 1
    assert session.answers[0] == 2


def test_reanswer_overwrites_before_advance():
    session = AssessmentSession()
    session.start("gad7")
    session.answer(1)
    session.answer(3)
    assert session.answers[0] == 3
    assert session.current_answer == 3


def test_out_of_range_answers_rejected():
    session = AssessmentSession()
    session.start("gad7")
    for bad in (-1, 4, 1.5, True, "2", None):
        assert not session.answer(bad)
    assert session.answers == (None,) * 7


def test_advance_without_answer_does_nothing():
    session = AssessmentSession()
    session.start("gad7")
    assert session.advance() == AssessmentStep.QUESTIONS
    assert session.current_index == 0


def test_answers_length_matches_questions_throughout():
    session = AssessmentSession()
    session.start("phq9")
    for score in [0, 1, 2, 3, 0, 1, 2, 3, 0]:
        assert len(session.answers) == 9
        session.answer(score)
        session.advance()
    assert len(session.answers) == 9


def test_last_answer_moves_to_result():
    session = AssessmentSession()
    session.start("gad7")
    _complete(session, [2] * 7)
    assert session.step == AssessmentStep.RESULT
    assert session.current_index == 7
    assert session.current_question is None
    result = session.result()
    assert result.total_score == 14
    assert result.band.label == "Moderate Anxiety"
    assert result.high_risk


def test_answer_ignored_after_result():
    session = AssessmentSession()
    session.start("gad7")
    _complete(session, [0] * 7)
    assert not session.answer(3)


def test_restart_only_from_result():
    session = AssessmentSession()
    assert not session.restart()
    session.start("gad7")
    assert not session.restart()
    _complete(session, [0] * 7)
    assert session.restart()
    assert session.step == AssessmentStep.SELECTION
    assert session.definition is None


def test_close_then_reopen_starts_fresh():
    session = AssessmentSession()
    session.start("phq9")
    _complete(session, [3, 3, 3])
    session.close()
    assert session.step == AssessmentStep.SELECTION
    session.start("phq9")
    assert session.answers == (None,) * 9
    assert session.current_index == 0
