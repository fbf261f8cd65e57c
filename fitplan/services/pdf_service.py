"""
PDF export service - render a fitness plan to an A4 document.
"""
import re

import fitz  # PyMuPDF

from fitplan.core.logger import logger
from fitplan.models.plan import FitnessPlan


PAGE_WIDTH, PAGE_HEIGHT = fitz.paper_size("a4")
MARGIN = 42           # ~15mm
BOTTOM_LIMIT = PAGE_HEIGHT - 57
BANNER_HEIGHT = 113   # ~40mm
BRAND_COLOR = (139 / 255, 92 / 255, 246 / 255)
WHITE = (1, 1, 1)
BLACK = (0, 0, 0)

FONT_REGULAR = "helv"
FONT_BOLD = "hebo"
FONT_ITALIC = "heit"


def wrap_text(text: str, max_width: float, fontname: str, fontsize: float) -> list[str]:
    """Greedy word wrap by measured glyph width."""
    lines = []
    for paragraph in text.split("\n"):
        current = ""
        for word in paragraph.split(" "):
            candidate = f"{current} {word}" if current else word
            if fitz.get_text_length(candidate, fontname=fontname, fontsize=fontsize) <= max_width:
                current = candidate
            else:
                if current:
                    lines.append(current)
                current = word
        lines.append(current)
    return lines


class _PlanDocument:
    """Cursor-based writer that breaks pages automatically."""

    def __init__(self):
        self.doc = fitz.open()
        self.page = None
        self.y = MARGIN

    def new_page(self) -> None:
        self.page = self.doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        self.y = MARGIN

    def gap(self, points: float) -> None:
        self.y += points

    def add_text(self, text: str, fontsize: float = 12, bold: bool = False) -> None:
        fontname = FONT_BOLD if bold else FONT_REGULAR
        line_height = fontsize * 1.35
        for line in wrap_text(text, PAGE_WIDTH - 2 * MARGIN, fontname, fontsize):
            if self.y + line_height > BOTTOM_LIMIT:
                self.new_page()
            self.page.insert_text(
                (MARGIN, self.y + fontsize),
                line,
                fontsize=fontsize,
                fontname=fontname,
                color=BLACK,
            )
            self.y += line_height
        self.y += 3

    def centered(self, text: str, y: float, fontsize: float, fontname: str, color=WHITE) -> None:
        width = fitz.get_text_length(text, fontname=fontname, fontsize=fontsize)
        self.page.insert_text(
            ((PAGE_WIDTH - width) / 2, y),
            text,
            fontsize=fontsize,
            fontname=fontname,
            color=color,
        )

    def banner(self, title: str, subtitle: str) -> None:
        self.page.draw_rect(fitz.Rect(0, 0, PAGE_WIDTH, BANNER_HEIGHT), color=None, fill=BRAND_COLOR)
        self.centered(title, 57, 24, FONT_BOLD)
        self.centered(subtitle, 85, 14, FONT_BOLD)
        self.y = BANNER_HEIGHT + 28

    def quote_box(self, text: str) -> None:
        fontsize = 12
        lines = wrap_text(f'"{text}"', PAGE_WIDTH - 2 * MARGIN - 28, FONT_ITALIC, fontsize)
        height = max(85, len(lines) * fontsize * 1.4 + 28)
        if self.y + height > BOTTOM_LIMIT:
            self.new_page()
        self.page.draw_rect(
            fitz.Rect(MARGIN, self.y, PAGE_WIDTH - MARGIN, self.y + height),
            color=None,
            fill=BRAND_COLOR,
        )
        baseline = self.y + (height - len(lines) * fontsize * 1.4) / 2 + fontsize
        for line in lines:
            self.centered(line, baseline, fontsize, FONT_ITALIC)
            baseline += fontsize * 1.4
        self.y += height

    def to_bytes(self) -> bytes:
        try:
            return self.doc.tobytes()
        finally:
            self.doc.close()


def _fmt(value) -> str:
    return f"{value:g}" if isinstance(value, float) else str(value)


def _joined(fields) -> str:
    """Join the (label, value, unit) fields that have a value with bars."""
    return " | ".join(f"{label}: {_fmt(value)}{unit}" for label, value, unit in fields if value not in (None, ""))


def export_plan_to_pdf(plan: FitnessPlan, user_name: str) -> bytes:
    """
    Render the plan as a PDF: workout days, diet, then tips and motivation.

    Args:
        plan: Plan to render
        user_name: Name shown in the title banner

    Returns:
        PDF file content
    """
    pdf = _PlanDocument()
    pdf.new_page()
    pdf.banner("Your Personalized Fitness Plan", f"Generated for {user_name}")

    # Workout Plan
    pdf.add_text("7-DAY WORKOUT PLAN", 18, bold=True)
    pdf.gap(5)

    for day in plan.workoutPlan.days:
        pdf.add_text(f"{day.day} - {day.focus}" if day.focus else day.day, 14, bold=True)
        if day.warmup:
            pdf.add_text(f"Warm-up: {day.warmup}", 10)

        for idx, exercise in enumerate(day.exercises, start=1):
            pdf.add_text(f"{idx}. {exercise.name}", 11, bold=True)
            detail = _joined([("Sets", exercise.sets, ""), ("Reps", exercise.reps, ""), ("Rest", exercise.rest, "")])
            if detail:
                pdf.add_text(f"   {detail}", 9)
            if exercise.notes:
                pdf.add_text(f"   Note: {exercise.notes}", 9)

        if day.cooldown:
            pdf.add_text(f"Cool-down: {day.cooldown}", 10)
        pdf.gap(5)

    # Diet Plan
    diet = plan.dietPlan
    pdf.new_page()
    pdf.add_text("DAILY DIET PLAN", 18, bold=True)
    pdf.gap(5)

    pdf.add_text("Total Daily Intake:", 12, bold=True)
    pdf.add_text(
        f"Calories: {_fmt(diet.totalCalories)} | Protein: {_fmt(diet.totalProtein)}g | "
        f"Carbs: {_fmt(diet.totalCarbs)}g | Fats: {_fmt(diet.totalFats)}g",
        10,
    )
    pdf.gap(5)

    for _, meal in diet.meals():
        pdf.add_text(f"{meal.name} ({meal.time})" if meal.time else meal.name, 12, bold=True)
        for item in meal.items:
            pdf.add_text(f"- {item}", 10)
        macros = _joined([
            ("Calories", meal.calories, ""), ("Protein", meal.protein, "g"),
            ("Carbs", meal.carbs, "g"), ("Fats", meal.fats, "g"),
        ])
        if macros:
            pdf.add_text(f"Macros: {macros}", 9)
        pdf.gap(3)

    # Tips
    pdf.new_page()
    pdf.add_text("EXPERT TIPS FOR SUCCESS", 18, bold=True)
    pdf.gap(5)
    for idx, tip in enumerate(plan.tips, start=1):
        pdf.add_text(f"{idx}. {tip}", 11)
        pdf.gap(2)

    # Motivation
    pdf.gap(5)
    pdf.quote_box(plan.motivation)

    page_count = len(pdf.doc)
    content = pdf.to_bytes()
    logger.info(f"Exported plan PDF: {page_count} pages, {len(content)} bytes")
    return content


def pdf_filename(user_name: str) -> str:
    """Download name for a user's plan, e.g. ``Priya_Fitness_Plan.pdf``."""
    safe = re.sub(r"[^A-Za-z0-9_-]+", "_", user_name.strip()) or "My"
    return f"{safe}_Fitness_Plan.pdf"
