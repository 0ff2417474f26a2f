from careerzoom.services.improvement import (
    extract_scores, classify_areas, average_score, round_half_up,
)

from conftest import scored, build_feedback


def test_scores_and_areas_for_mixed_feedback():
    fb = build_feedback(content=scored(clarity=2), delivery=scored(pacing=4.5))
    assert extract_scores(fb) == [2, 4.5]
    weak, strong = classify_areas(fb)
    assert weak == ['content_clarity']
    assert strong == ['delivery_pacing']
    assert average_score(extract_scores(fb)) == 3.25


def test_neutral_scores_emit_no_tags():
    fb = build_feedback(content=scored(clarity=3, depth=3.5), delivery=scored(pacing=3.99),
                        technical=scored(accuracy=3))
    assert classify_areas(fb) == ([], [])
    assert len(extract_scores(fb)) == 4


def test_no_scored_subcategories():
    for fb in (build_feedback(), build_feedback(content={}, delivery={}, technical={}),
               build_feedback(content={'clarity': {'comments': 'n/a'}})):
        assert extract_scores(fb) == []
        assert average_score(extract_scores(fb)) == 0
        assert classify_areas(fb) == ([], [])


def test_missing_and_zero_scores_are_excluded():
    fb = build_feedback(content={'clarity': {'score': 0}, 'depth': {'score': None}, 'structure': {'score': 2}})
    assert extract_scores(fb) == [2]
    assert classify_areas(fb) == (['content_structure'], [])


def test_scores_keep_category_order():
    fb = build_feedback(technical=scored(accuracy=1), delivery=scored(pacing=5), content=scored(depth=4))
    assert extract_scores(fb) == [4, 5, 1]
    weak, strong = classify_areas(fb)
    assert weak == ['technical_accuracy']
    assert strong == ['content_depth', 'delivery_pacing']


def test_thresholds_are_inclusive_at_four_exclusive_at_three():
    fb = build_feedback(content=scored(a=2.99, b=3, c=4))
    assert classify_areas(fb) == (['content_a'], ['content_c'])


def test_round_half_up():
    assert round_half_up(100) == 100.0
    assert round_half_up(12.345) == 12.35
    # halves go toward +inf, negative ones included
    assert round_half_up(-33.335) == -33.33
    assert round_half_up(-12.344) == -12.34
    assert round_half_up(-0.125) == -0.12
    assert round_half_up(3.25, 1) == 3.3
