from __future__ import annotations

from dataclasses import dataclass

import numpy as np

COLOR_QUIZ_GRADES = ("D", "E", "F", "G", "H", "I", "J", "K", "L", "M")
CLARITY_QUIZ_GRADES = ("FL", "IF", "VVS1", "VVS2", "VS1", "VS2", "SI1", "SI2", "I1", "I2")

QUIZ_KINDS = ("color", "clarity", "mixed")
OPTION_COUNT = 4
# how far (in grades) distractors start out from the correct answer
DISTRACTOR_SPREAD = {"color": 2, "clarity": 1}
RENDER_SEED_LIMIT = 100_000

COLOR_HINTS = (
    (2, "Look for absence of any warmth - ice white appearance"),
    (5, "Check for very subtle warmth compared to colorless"),
    (7, "Notice the faint yellow/warm tint becoming visible"),
)
COLOR_HINT_DEFAULT = "Observe the noticeable yellow coloration"
CLARITY_HINTS = (
    (1, "No inclusions visible - perfectly clean"),
    (3, "Extremely tiny inclusions, very hard to spot"),
    (5, "Minor inclusions visible with close inspection"),
    (7, "Noticeable inclusions, check center and edges"),
)
CLARITY_HINT_DEFAULT = "Obvious inclusions affecting the diamond appearance"

SCORE_LABELS = ((90.0, "Expert"), (70.0, "Proficient"), (50.0, "Learning"))
SCORE_LABEL_DEFAULT = "Beginner"


@dataclass(frozen=True)
class QuizQuestion:
    id: int
    kind: str
    correct_answer: str
    options: tuple[str, ...]
    render_seed: int

    def is_correct(self, answer: str) -> bool:
        return answer == self.correct_answer

    @property
    def hint(self) -> str:
        return grade_hint(self.kind, self.correct_answer)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "kind": self.kind,
            "correct_answer": self.correct_answer,
            "options": list(self.options),
            "render_seed": self.render_seed,
            "hint": self.hint,
        }


def _grades_for(kind: str) -> tuple[str, ...]:
    if kind == "color":
        return COLOR_QUIZ_GRADES
    if kind == "clarity":
        return CLARITY_QUIZ_GRADES
    msg = f"Unknown question kind: {kind}"
    raise ValueError(msg)


def _pick_options(
    grades: tuple[str, ...],
    correct_idx: int,
    spread: int,
    rng: np.random.Generator,
) -> tuple[str, ...]:
    # Widen the window until it holds enough distinct neighbours (edge grades need this).
    while True:
        low = max(0, correct_idx - spread)
        high = min(len(grades) - 1, correct_idx + spread)
        candidates = [idx for idx in range(low, high + 1) if idx != correct_idx]
        if len(candidates) >= OPTION_COUNT - 1 or len(candidates) == len(grades) - 1:
            break
        spread += 1
    picked = rng.choice(candidates, size=min(OPTION_COUNT - 1, len(candidates)), replace=False)
    options = [grades[correct_idx], *(grades[int(idx)] for idx in picked)]
    order = rng.permutation(len(options))
    return tuple(options[int(idx)] for idx in order)


def generate_question(kind: str, question_id: int, rng: np.random.Generator) -> QuizQuestion:
    grades = _grades_for(kind)
    render_seed = int(rng.integers(0, RENDER_SEED_LIMIT))
    correct_idx = int(rng.integers(0, len(grades)))
    return QuizQuestion(
        id=question_id,
        kind=kind,
        correct_answer=grades[correct_idx],
        options=_pick_options(grades, correct_idx, DISTRACTOR_SPREAD[kind], rng),
        render_seed=render_seed,
    )


def generate_quiz(kind: str = "mixed", count: int = 10, seed: int | None = None) -> list[QuizQuestion]:
    """Generate a grading quiz; identical seeds give identical quizzes."""
    if kind not in QUIZ_KINDS:
        msg = f"Unknown quiz kind: {kind} (expected one of {QUIZ_KINDS})"
        raise ValueError(msg)
    if count <= 0:
        msg = "count must be positive"
        raise ValueError(msg)
    rng = np.random.default_rng(seed)
    questions = []
    for question_id in range(count):
        question_kind = kind
        if kind == "mixed":
            question_kind = "color" if rng.random() > 0.5 else "clarity"
        questions.append(generate_question(question_kind, question_id, rng))
    return questions


def grade_hint(kind: str, grade: str) -> str:
    grades = _grades_for(kind)
    if grade not in grades:
        msg = f"Unknown {kind} grade for the quiz: {grade}"
        raise ValueError(msg)
    idx = grades.index(grade)
    if kind == "color":
        hints, default = COLOR_HINTS, COLOR_HINT_DEFAULT
    else:
        hints, default = CLARITY_HINTS, CLARITY_HINT_DEFAULT
    for limit, hint in hints:
        if idx <= limit:
            return hint
    return default


def score_label(score: int, total: int) -> str:
    if total <= 0:
        msg = "total must be positive"
        raise ValueError(msg)
    percentage = (score / total) * 100.0
    for threshold, label in SCORE_LABELS:
        if percentage >= threshold:
            return label
    return SCORE_LABEL_DEFAULT


__all__ = [
    "QuizQuestion",
    "COLOR_QUIZ_GRADES",
    "CLARITY_QUIZ_GRADES",
    "generate_question",
    "generate_quiz",
    "grade_hint",
    "score_label",
]
