WELCOME_TEXT = (
    "👋 Hi! I walk you through yes/no decision trees.\n\n"
    "Pick a tree from the menu below or send /play &lt;tree&gt;."
)

HELP_TEXT = (
    "<b>How it works</b>\n\n"
    "• I ask a question, you answer <b>yes</b> or <b>no</b> (buttons or text).\n"
    "• Some stories need words first: just type them.\n"
    "• Send «cancel» at any time to stop.\n\n"
    "Available trees:\n{trees}"
)

WORD_PROMPT = "Please enter a {slot}:"
BLANK_WORD = "Please enter a word."
INVALID_ANSWER = "Invalid input. Please enter 'yes' or 'no'."
WALK_CANCELLED = "Walk cancelled."
UNKNOWN_TREE = "I don't know that tree. Available: {trees}"
NO_ACTIVE_WALK = "There is no walk in progress."
INTERNAL_ERROR = "Something is wrong with this tree. The walk was stopped."
STALE_BUTTON = "This button belongs to an earlier question."
