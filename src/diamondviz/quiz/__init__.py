from diamondviz.quiz.questions import QuizQuestion, generate_quiz, grade_hint, score_label

__all__ = ["QuizQuestion", "generate_quiz", "grade_hint", "score_label"]
