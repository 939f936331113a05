"""DOCX document generator for printable quizzes and answer keys."""

import string
from datetime import datetime
from pathlib import Path

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt, RGBColor

from awareness_quiz.models import QuestionKind, Quiz
from awareness_quiz.models.quiz import MultipleChoiceQuestion, QuestionBase, parse_index

DIFFICULTY_COLORS = {
    "easy": RGBColor(0, 128, 0),
    "medium": RGBColor(255, 140, 0),
    "hard": RGBColor(255, 0, 0),
}


def ensure_output_directory(output_dir: str = "output") -> Path:
    """
    Ensure the output directory exists.

    Args:
        output_dir: Directory path to create

    Returns:
        Path object for the output directory
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    return output_path


def generate_timestamped_filename(base_name: str, extension: str = "docx") -> str:
    """
    Generate a filename with timestamp.

    Args:
        base_name: Base name for the file
        extension: File extension (without dot)

    Returns:
        Filename with timestamp
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    # Drop any path components
    base_name = Path(base_name).name
    return f"{base_name}_{timestamp}.{extension}"


def option_label(index: int) -> str:
    """Letter shown in front of an option (0 -> A)."""
    return string.ascii_uppercase[index] if index < 26 else str(index + 1)


def answer_text(question: QuestionBase) -> str:
    """Human-readable correct answer for the answer key."""
    if question.requires_manual_review:
        return "Manual review"
    if isinstance(question, MultipleChoiceQuestion):
        option = question.correct_option
        if option is None:
            return question.correct_answer
        return f"{option_label(parse_index(question.correct_answer))} - {option}"
    return question.correct_answer


def export_to_docx(
    quiz: Quiz,
    output_path: str,
    include_answers: bool = False,
    use_output_dir: bool = True,
    output_dir: str = "output",
) -> str:
    """
    Export a quiz to a formatted DOCX file.

    Args:
        quiz: Quiz to export
        output_path: Where the DOCX file should be saved
        include_answers: If True, marks correct answers and adds an answer key
        use_output_dir: If True, saves to output_dir with a timestamp
        output_dir: Directory to save files in

    Returns:
        Path to the created DOCX file
    """
    if use_output_dir:
        output_dir_path = ensure_output_directory(output_dir)
        filename = generate_timestamped_filename(Path(output_path).stem)
        output_path = str(output_dir_path / filename)

    doc = Document()
    setup_document_styles(doc)

    title = doc.add_heading(quiz.title, level=0)
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER

    if quiz.description:
        desc_para = doc.add_paragraph(quiz.description)
        desc_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
        desc_para.runs[0].italic = True

    doc.add_paragraph()
    info_para = doc.add_paragraph()
    info_para.add_run(f"Questions: {quiz.question_count}").bold = True
    info_para.add_run("  |  ")
    info_para.add_run(f"Total Points: {quiz.total_points}").bold = True
    info_para.add_run("  |  ")
    info_para.add_run(f"Passing Score: {quiz.passing_score}%").bold = True
    if quiz.time_limit:
        info_para.add_run("  |  ")
        info_para.add_run(f"Time Limit: {quiz.time_limit} min").bold = True
    info_para.alignment = WD_ALIGN_PARAGRAPH.CENTER

    difficulty_para = doc.add_paragraph()
    difficulty_run = difficulty_para.add_run(
        f"Difficulty: {quiz.difficulty.value.capitalize()}  |  Category: {quiz.category}"
    )
    difficulty_run.italic = True
    difficulty_run.font.size = Pt(9)
    difficulty_run.font.color.rgb = DIFFICULTY_COLORS[quiz.difficulty.value]
    difficulty_para.alignment = WD_ALIGN_PARAGRAPH.CENTER

    if quiz.instructions:
        doc.add_paragraph()
        doc.add_heading("Instructions", level=2)
        doc.add_paragraph(quiz.instructions)

    doc.add_page_break()

    add_questions_to_document(doc, quiz, include_answers)

    if include_answers:
        add_answer_key(doc, quiz)

    doc.save(output_path)

    return output_path


def setup_document_styles(doc: Document) -> None:
    """
    Set up document-wide styles.

    Args:
        doc: Document to configure
    """
    style = doc.styles["Normal"]
    font = style.font
    font.name = "Calibri"
    font.size = Pt(11)

    for section in doc.sections:
        section.top_margin = Inches(1)
        section.bottom_margin = Inches(1)
        section.left_margin = Inches(1)
        section.right_margin = Inches(1)


def add_questions_to_document(doc: Document, quiz: Quiz, include_answers: bool = False) -> None:
    """
    Add every question of the quiz to the document.

    Args:
        doc: Document to add to
        quiz: Quiz whose questions are rendered
        include_answers: If True, highlights answers and shows explanations
    """
    heading = doc.add_heading("Questions", level=1)
    heading.runs[0].font.color.rgb = RGBColor(0, 51, 102)

    for i, question in enumerate(quiz.questions, 1):
        q_para = doc.add_paragraph()
        q_run = q_para.add_run(f"Q{i}. ")
        q_run.bold = True
        q_run.font.size = Pt(12)
        q_para.add_run(question.prompt)
        points_run = q_para.add_run(
            f"  ({question.points} point{'s' if question.points != 1 else ''})"
        )
        points_run.italic = True
        points_run.font.size = Pt(9)

        if question.kind == QuestionKind.TEXT:
            line_para = doc.add_paragraph("   Answer: ______________________________")
            line_para.paragraph_format.left_indent = Inches(0.5)
            if include_answers:
                key_para = doc.add_paragraph()
                key_para.paragraph_format.left_indent = Inches(0.5)
                key_run = key_para.add_run(f"Expected: {answer_text(question)}")
                key_run.bold = True
                key_run.font.color.rgb = RGBColor(0, 128, 0)
        else:
            for index, option in enumerate(question.options):
                opt_para = doc.add_paragraph(f"   {option_label(index)}. {option}")
                opt_para.paragraph_format.left_indent = Inches(0.5)

                if include_answers and question.is_correct(
                    str(index) if question.kind == QuestionKind.MULTIPLE_CHOICE else option
                ):
                    opt_para.runs[0].bold = True
                    opt_para.runs[0].font.color.rgb = RGBColor(0, 128, 0)
                    opt_para.add_run(" ✓").font.color.rgb = RGBColor(0, 128, 0)

        if include_answers and question.explanation:
            exp_para = doc.add_paragraph()
            exp_para.paragraph_format.left_indent = Inches(0.5)
            exp_run = exp_para.add_run(f"Explanation: {question.explanation}")
            exp_run.italic = True
            exp_run.font.size = Pt(10)
            exp_run.font.color.rgb = RGBColor(64, 64, 64)

        doc.add_paragraph()


def add_answer_key(doc: Document, quiz: Quiz) -> None:
    """
    Add an answer key table at the end of the document.

    Args:
        doc: Document to add to
        quiz: Quiz object
    """
    doc.add_page_break()

    header = doc.add_heading("Answer Key", level=1)
    header.alignment = WD_ALIGN_PARAGRAPH.CENTER
    header.runs[0].font.color.rgb = RGBColor(0, 51, 102)

    doc.add_paragraph()

    table = doc.add_table(rows=1, cols=4)
    table.style = "Light Grid Accent 1"

    header_cells = table.rows[0].cells
    header_cells[0].text = "Q#"
    header_cells[1].text = "Answer"
    header_cells[2].text = "Points"
    header_cells[3].text = "Explanation"

    for cell in header_cells:
        for paragraph in cell.paragraphs:
            for run in paragraph.runs:
                run.bold = True

    for i, question in enumerate(quiz.questions, 1):
        row_cells = table.add_row().cells
        row_cells[0].text = str(i)
        row_cells[1].text = answer_text(question)
        row_cells[2].text = str(question.points)
        row_cells[3].text = question.explanation or "N/A"

    doc.add_paragraph()


def generate_answer_key(quiz: Quiz, output_path: str) -> str:
    """
    Generate a separate answer key document.

    Args:
        quiz: Quiz object
        output_path: Path where the answer key should be saved

    Returns:
        Path to the created answer key file
    """
    doc = Document()
    setup_document_styles(doc)

    title = doc.add_heading(f"{quiz.title} - Answer Key", level=0)
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER

    doc.add_paragraph()

    add_answer_key(doc, quiz)

    doc.save(output_path)

    return output_path


def export_quiz_with_separate_answers(
    quiz: Quiz, base_path: str, output_dir: str = "output"
) -> tuple[str, str]:
    """
    Export a quiz with questions and answers in separate files.

    Args:
        quiz: Quiz object
        base_path: Base path for output files (without extension)
        output_dir: Directory to save files in

    Returns:
        Tuple of (questions_path, answers_path)
    """
    output_path = ensure_output_directory(output_dir)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    base_name = Path(base_path).name

    questions_path = str(output_path / f"{base_name}_questions_{timestamp}.docx")
    answers_path = str(output_path / f"{base_name}_answers_{timestamp}.docx")

    # Paths are already final, so skip the output dir handling
    export_to_docx(quiz, questions_path, include_answers=False, use_output_dir=False)
    generate_answer_key(quiz, answers_path)

    return questions_path, answers_path
