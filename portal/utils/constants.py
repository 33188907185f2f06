"""Common constants."""

# Submission form limits
MIN_NAME_LENGTH = 2
MIN_PHONE_LENGTH = 10
MIN_MOTIVATION_LENGTH = 50

# AI scoring
MIN_AI_SCORE = 0
MAX_AI_SCORE = 100
MAX_AI_FEEDBACK_LENGTH = 500
SCORING_FALLBACK_FEEDBACK = "Unable to score resume at this time."

# Chatbot
CHATBOT_FALLBACK_REPLY = (
    "I'm having trouble right now. Please try again or contact our support team."
)
CHATBOT_MAX_FAQS = 3
CHATBOT_MAX_ROLES = 5

# Status email heading colours
STATUS_COLORS = {
    "shortlisted": "#22c55e",
    "rejected": "#ef4444",
    "accepted": "#FFD700",
}
DEFAULT_STATUS_COLOR = "#FFD700"
