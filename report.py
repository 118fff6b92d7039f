# report.py
# PDF-отчет по одной отправке: повторяет оба шага формы.
# Все координаты в миллиметрах на листе A4.

from datetime import datetime, timezone

from fpdf import FPDF

from logic import CRITERIA

TITLE = 'Laptop Selection Criteria Weighing'
FONT = 'Helvetica'

LEFT = 20
ROW_WIDTH = 170
ROW_HEIGHT = 12
ROW_STEP = 15
PAGE_BOTTOM = 270
PAGE_TOP = 20

BLACK = (0, 0, 0)
GREY = (80, 80, 80)
LIGHT_GREY = (150, 150, 150)
ROW_FILL = (245, 245, 245)
NAVY = (30, 50, 100)
GREEN = (30, 100, 30)
BLUE = (0, 0, 150)
FOOTER_GREY = (100, 100, 100)


def pdf_object_key(submission_id):
    return f'criteria-weighing-{submission_id}.pdf'


def sanitize_for_pdf(text):
    # Встроенные шрифты покрывают только Latin-1, остальное заменяем на '?'
    return str(text).encode('latin-1', 'replace').decode('latin-1')


def _name_of(criterion):
    if isinstance(criterion, dict) and criterion.get('name') is not None:
        return sanitize_for_pdf(criterion['name'])
    return '?'


def _rank_map(ranked_criteria):
    # Ранг = позиция в упорядоченном списке, а не поле rank из запроса
    ranks = {}
    if not isinstance(ranked_criteria, list):
        return ranks
    for index, criterion in enumerate(ranked_criteria):
        if isinstance(criterion, dict) and criterion.get('id') is not None:
            ranks.setdefault(str(criterion['id']), index + 1)
    return ranks


class _Report:
    def __init__(self, generated_at):
        self.pdf = FPDF(orientation='P', unit='mm', format='A4')
        self.pdf.set_auto_page_break(auto=False)
        self.pdf.set_title(TITLE)
        self.pdf.creation_date = generated_at
        self.pdf.add_page()
        self.y = PAGE_TOP

    def text(self, x, y, value, size=None, color=BLACK):
        if size is not None:
            self.pdf.set_font(FONT, '', size)
        self.pdf.set_text_color(*color)
        self.pdf.text(x, y, sanitize_for_pdf(value))

    def shaded_row(self, index):
        # Серый фон у четных строк
        if index % 2 == 0:
            self.pdf.set_fill_color(*ROW_FILL)
            self.pdf.rect(LEFT, self.y - 7, ROW_WIDTH, ROW_HEIGHT, style='F')

    def title(self):
        self.pdf.set_font(FONT, '', 22)
        x = (self.pdf.w - self.pdf.get_string_width(TITLE)) / 2
        self.text(x, 20, TITLE, color=NAVY)
        self.pdf.set_draw_color(*BLACK)
        self.pdf.set_line_width(0.5)
        self.pdf.line(LEFT, 25, LEFT + ROW_WIDTH, 25)

    def heading(self, y, title, subtitle):
        self.text(LEFT, y, title, size=18)
        self.text(LEFT, y + 7, subtitle, size=12, color=GREY)

    def criteria_table(self, ranked_criteria):
        self.heading(40, 'Step 1: Rank Criteria by Importance',
                     '(Ranked from most important to least important)')
        ranks = _rank_map(ranked_criteria)
        self.y = 60
        self.pdf.set_font(FONT, '', 14)
        # Всегда все пять критериев, даже если в запросе их меньше
        for index, criterion in enumerate(CRITERIA):
            self.shaded_row(index)
            self.text(25, self.y, f'{criterion.id}: {criterion.name}')
            rank = ranks.get(criterion.id)
            if rank is not None:
                self.text(160, self.y, f'Rank: {rank}', color=GREEN)
            else:
                self.text(160, self.y, 'Not ranked', color=LIGHT_GREY)
            self.y += ROW_STEP

    def comparison_list(self, comparisons):
        self.y += 15
        self.heading(self.y, 'Step 2: Compare Adjacent Criteria',
                     '(How much more important each criterion is than the previous)')
        self.y += 20
        self.pdf.set_font(FONT, '', 14)

        if not isinstance(comparisons, list) or not comparisons:
            self.text(25, self.y, 'No comparisons made', color=LIGHT_GREY)
            return

        for index, comp in enumerate(comparisons):
            comp = comp if isinstance(comp, dict) else {}
            self.shaded_row(index)
            self.text(25, self.y, _name_of(comp.get('criterion2')))
            self.text(70, self.y, 'is', color=GREY)
            self.text(80, self.y, str(comp.get('importance', '?')), color=BLUE)
            self.text(90, self.y, 'times more important than', color=GREY)
            self.text(155, self.y, _name_of(comp.get('criterion1')))
            self.y += ROW_STEP

            # Место на странице закончилось
            if self.y > PAGE_BOTTOM:
                self.pdf.add_page()
                self.y = PAGE_TOP

    def footer(self, generated_at, submission_id):
        self.pdf.set_font(FONT, '', 10)
        stamp = generated_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip()
        self.text(LEFT, 280, f'Generated on: {stamp}', color=FOOTER_GREY)
        self.text(LEFT, 285, f'Submission ID: {submission_id}', color=FOOTER_GREY)

    def build(self, ranked_criteria, comparisons, submission_id, generated_at):
        self.title()
        self.criteria_table(ranked_criteria)
        self.comparison_list(comparisons)
        self.footer(generated_at, submission_id)

    def output(self):
        return bytes(self.pdf.output())


def render_submission_pdf(ranked_criteria, comparisons, submission_id, generated_at=None):
    """
    Рендерит отчет и возвращает байты PDF.
    Время генерации по умолчанию - текущее, в UTC.
    """
    generated_at = generated_at or datetime.now(timezone.utc)
    report = _Report(generated_at)
    report.build(ranked_criteria, comparisons, submission_id, generated_at)
    return report.output()
