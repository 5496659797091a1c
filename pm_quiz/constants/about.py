"""Static metadata describing PM Quiz Studio."""

APP_NAME = "PM Quiz Studio"
APP_VERSION = "0.1"
APP_TAGLINE = "Learn → Quiz → Score → Repeat"
APP_ABOUT_TEXT = (
    "PM Quiz Studio serves short, educational multiple-choice quizzes from a local web page. "
    "No login: attempts are saved on this device."
)
