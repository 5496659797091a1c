"""Stylesheet generation for the quiz page."""

from .color_palette import ColorPalette


class Styles:
    """Helper class to generate the page's CSS from the palette."""

    @staticmethod
    def get_page_style() -> str:
        return f"""
      :root {{ font-family: 'Inter', system-ui, sans-serif; background: {ColorPalette.BACKGROUND_PAGE}; color: {ColorPalette.TEXT_PRIMARY}; }}
      body {{ margin: 0 auto; max-width: 56rem; padding: 2rem 1.25rem; display: flex; flex-direction: column; gap: 1.25rem; }}
      h1 {{ margin: 0.25rem 0; font-size: 2.25rem; background: linear-gradient(90deg, {ColorPalette.ACCENT_PRIMARY}, {ColorPalette.ACCENT_SECONDARY}, {ColorPalette.ACCENT_TERTIARY}); -webkit-background-clip: text; background-clip: text; color: transparent; }}
      .card {{ background: {ColorPalette.BACKGROUND_CARD}; border: 1px solid {ColorPalette.BORDER_PRIMARY}; border-radius: 1.5rem; padding: 1.5rem; box-shadow: 0 4px 20px rgba(0, 0, 0, 0.06); }}
      .hidden {{ display: none; }}
      .muted {{ color: {ColorPalette.TEXT_MUTED}; font-size: 0.9rem; }}
      .tagline {{ display: inline-block; border-radius: 999px; padding: 0.2rem 0.75rem; font-size: 0.75rem; font-weight: 600; background: {ColorPalette.BACKGROUND_SELECTED}; color: {ColorPalette.ACCENT_PRIMARY}; }}
      input, select {{ width: 100%; box-sizing: border-box; margin-top: 0.75rem; border: 1px solid {ColorPalette.BORDER_PRIMARY}; border-radius: 0.75rem; padding: 0.75rem 1rem; font-size: 1rem; background: #fff; }}
      .primary-button {{ border: none; border-radius: 0.9rem; padding: 0.85rem 1.5rem; font-size: 1rem; font-weight: 800; color: #fff; cursor: pointer; background: linear-gradient(90deg, {ColorPalette.ACCENT_PRIMARY}, {ColorPalette.ACCENT_SECONDARY}); }}
      .secondary-button {{ border: 1px solid {ColorPalette.BORDER_PRIMARY}; border-radius: 0.9rem; padding: 0.85rem 1.5rem; font-size: 1rem; font-weight: 600; color: {ColorPalette.TEXT_SECONDARY}; background: #fff; cursor: pointer; }}
      button:disabled {{ opacity: 0.4; cursor: not-allowed; }}
      .links a {{ display: block; margin-top: 0.5rem; text-align: center; border: 1px solid {ColorPalette.BORDER_FOCUS}; border-radius: 0.75rem; padding: 0.6rem; color: {ColorPalette.ACCENT_PRIMARY}; font-weight: 600; text-decoration: none; }}
      .progress-track {{ width: 100%; height: 0.75rem; background: {ColorPalette.BORDER_PRIMARY}; border-radius: 999px; overflow: hidden; margin-top: 0.75rem; }}
      #progress-fill {{ height: 100%; width: 0; background: linear-gradient(90deg, {ColorPalette.ACCENT_PRIMARY}, {ColorPalette.ACCENT_SECONDARY}, {ColorPalette.ACCENT_TERTIARY}); transition: width 300ms ease; }}
      #question-prompt {{ margin-top: 1.5rem; font-size: 1.4rem; font-weight: 800; }}
      .options {{ display: grid; gap: 0.75rem; margin-top: 1.25rem; }}
      .option-button {{ text-align: left; border: 1px solid {ColorPalette.BORDER_PRIMARY}; border-radius: 1rem; padding: 1rem 1.25rem; font-size: 1rem; font-weight: 600; background: #fff; color: {ColorPalette.TEXT_PRIMARY}; cursor: pointer; }}
      .option-button.selected {{ border-color: {ColorPalette.BORDER_FOCUS}; background: {ColorPalette.BACKGROUND_SELECTED}; }}
      .nav {{ display: flex; justify-content: space-between; margin-top: 1.5rem; }}
      .badge-title {{ font-size: 2rem; font-weight: 800; }}
      .pill {{ display: inline-block; border: 1px solid; border-radius: 999px; padding: 0.2rem 0.75rem; font-weight: 800; }}
      .history-row {{ display: flex; justify-content: space-between; border: 1px solid {ColorPalette.BORDER_PRIMARY}; border-radius: 1rem; padding: 0.75rem 1rem; margin-top: 0.5rem; }}
      .review-item {{ border-top: 1px solid {ColorPalette.BORDER_PRIMARY}; padding-top: 0.75rem; margin-top: 0.75rem; }}
      .correct {{ color: {ColorPalette.SUCCESS}; font-weight: 700; }}
      .incorrect {{ color: {ColorPalette.ERROR}; text-decoration: line-through; }}
{Styles.get_badge_styles()}"""

    @staticmethod
    def get_badge_styles() -> str:
        rules = []
        for name, colors in ColorPalette.BADGE_TONES.items():
            rules.append(
                f"      .tone-{name} .badge-title {{ color: {colors.title}; }}\n"
                f"      .tone-{name} .pill {{ background: {colors.background}; color: {colors.text}; border-color: {colors.border}; }}"
            )
        return "\n".join(rules)
