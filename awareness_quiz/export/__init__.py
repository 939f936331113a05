"""Export functionality for quizzes."""

from .docx_generator import export_quiz_with_separate_answers, export_to_docx

__all__ = ["export_to_docx", "export_quiz_with_separate_answers"]
