# rag.py
"""
Fixed answer set + cached answer embeddings + nearest-answer lookup.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from embeddings import EmptyCandidateSet, best_match

ANSWERS: Tuple[str, ...] = (
    "The capital of France is Paris.",
    "The tallest mountain in the world is Mount Everest.",
    "The square root of 64 is 8.",
    "Python is a popular programming language.",
)


@dataclass(frozen=True)
class AnswerIndex:
    answers: Tuple[str, ...]
    embeddings: Tuple[Tuple[float, ...], ...]

    def __post_init__(self):
        if len(self.answers) != len(self.embeddings):
            raise ValueError(
                f"{len(self.embeddings)} embeddings for {len(self.answers)} answers"
            )

    def __len__(self) -> int:
        return len(self.answers)

    @classmethod
    def build(cls, model, answers: Sequence[str] = ANSWERS) -> "AnswerIndex":
        """Embed every answer once; embeddings[i] belongs to answers[i]."""
        answers = tuple(answers)
        if not answers:
            raise EmptyCandidateSet("answer set is empty")
        vecs = model.embed(list(answers))
        return cls(answers, tuple(tuple(float(x) for x in v) for v in vecs))

    def answer_for(self, query_vec: Sequence[float]) -> str:
        return self.answers[best_match(query_vec, self.embeddings)]

    def make_answer(self, model, question: str) -> str:
        qvec: List[float] = model.embed([question])[0]
        return self.answer_for(qvec)
