"""Two-stage adaptive session state machine.

Module 1 is always standard difficulty. Finishing it routes the test-taker
to a hard or easy module 2 based on module 1 accuracy; the branch taken caps
the reported band score.

Only the four tallies, the phase and the active module are stored. All
percentages and the band label are recomputed on every read.

The session trusts its caller to sequence operations (module 2 answers are
not rejected before start_module2(), for instance); the HTTP layer enforces
ordering.
"""

from enum import Enum

from .scoring import MODULE2_EASY, MODULE2_HARD, band_score, branch_for, percentage


class Phase(str, Enum):
    MODULE1 = 'module1'
    BRANCHING = 'branching'
    MODULE2 = 'module2'
    COMPLETE = 'complete'


class Module(str, Enum):
    MODULE1 = 'module1'
    MODULE2_HARD = MODULE2_HARD
    MODULE2_EASY = MODULE2_EASY


class AdaptiveSession:

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.phase = Phase.MODULE1
        self.module = Module.MODULE1
        self.module1_correct = 0
        self.module1_total = 0
        self.module2_correct = 0
        self.module2_total = 0

    def record_module1_answer(self, correct: bool) -> None:
        self.module1_total += 1
        if correct:
            self.module1_correct += 1

    def finish_module1(self) -> Module:
        self.module = Module(branch_for(self.module1_correct, self.module1_total))
        self.phase = Phase.BRANCHING
        return self.module

    def start_module2(self) -> None:
        self.phase = Phase.MODULE2

    def record_module2_answer(self, correct: bool) -> None:
        self.module2_total += 1
        if correct:
            self.module2_correct += 1

    def finish_module2(self) -> None:
        self.phase = Phase.COMPLETE

    @property
    def module1_pct(self) -> int:
        return percentage(self.module1_correct, self.module1_total)

    @property
    def total_correct(self) -> int:
        return self.module1_correct + self.module2_correct

    @property
    def total_questions(self) -> int:
        return self.module1_total + self.module2_total

    @property
    def total_pct(self) -> int:
        return percentage(self.total_correct, self.total_questions)

    @property
    def is_hard(self) -> bool:
        return self.module is Module.MODULE2_HARD

    def band_score(self) -> str:
        return band_score(self.total_pct, self.is_hard)

    def snapshot(self) -> dict:
        return {
            'phase': self.phase.value,
            'module': self.module.value,
            'module1Correct': self.module1_correct,
            'module1Total': self.module1_total,
            'module2Correct': self.module2_correct,
            'module2Total': self.module2_total,
            'module1Pct': self.module1_pct,
            'totalCorrect': self.total_correct,
            'totalQuestions': self.total_questions,
            'totalPct': self.total_pct,
            'bandScore': self.band_score(),
        }
