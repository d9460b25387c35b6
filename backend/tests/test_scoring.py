from datetime import datetime, timezone

import pytest

from exam_player.services.exam.scoring import (
    MODULE2_EASY,
    MODULE2_HARD,
    band_score,
    branch_for,
    build_score_record,
    percentage,
    raw_percentage,
)


def test_percentage_handles_zero_total():
    assert percentage(0, 0) == 0
    assert raw_percentage(0, 0) == 0


def test_percentage_rounds_half_up():
    assert percentage(7, 9) == 78
    assert percentage(1, 8) == 13
    assert percentage(1, 3) == 33
    assert percentage(2, 3) == 67


@pytest.mark.parametrize('correct,total,expected', [
    (7, 10, MODULE2_HARD),
    (1, 3, MODULE2_EASY),
    (10, 10, MODULE2_HARD),
    (0, 0, MODULE2_EASY),
    # 69.6% displays as 70% but the raw value decides
    (16, 23, MODULE2_EASY),
])
def test_branch_uses_raw_percentage(correct, total, expected):
    assert branch_for(correct, total) == expected


def test_rounded_display_can_disagree_with_branch():
    assert percentage(16, 23) == 70
    assert branch_for(16, 23) == MODULE2_EASY


@pytest.mark.parametrize('pct,hard,label', [
    (100, True, '5.5–6.0'),
    (90, True, '5.5–6.0'),
    (89, True, '4.5–5.0'),
    (75, True, '4.5–5.0'),
    (74, True, '3.5–4.0'),
    (60, True, '3.5–4.0'),
    (59, True, '–3.5'),
    (0, True, '–3.5'),
    (90, False, '3.5–4.0'),
    (75, False, '3.0–3.5'),
    (60, False, '2.5–3.0'),
    (59, False, '–2.5'),
])
def test_band_score_ladders(pct, hard, label):
    assert band_score(pct, hard) == label


def test_build_score_record():
    now = datetime(2026, 2, 18, tzinfo=timezone.utc)
    record = build_score_record('toeic/part5', 7, 9, 12.8, now=now)
    assert record == {
        'taskId': 'toeic/part5',
        'date': '2026-02-18T00:00:00.000Z',
        'correct': 7,
        'total': 9,
        'pct': 78,
        'elapsedSeconds': 12,
    }


def test_build_score_record_includes_question_file():
    record = build_score_record('toeic/part7', 3, 4, 30, question_file='set-01.json')
    assert record['questionFile'] == 'set-01.json'
    assert record['date'].endswith('Z')


def test_build_score_record_skips_empty_session():
    assert build_score_record('toeic/part5', 0, 0, 12) is None
