"""Application-wide constants."""

DEFAULT_CATALOG = [
    "The Silence of the Lambs",
    "Pulp Fiction",
    "The Shawshank Redemption",
    "Inception",
    "Jurassic Park",
    "The Lord of the Rings: The Fellowship of the Ring",
    "Fight Club",
    "Titanic",
    "The Matrix",
    "Forrest Gump",
]

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

SECURITY_BLOCKED_PREFIX = "SECURITY_BLOCKED:"
ALL_RECOMMENDED_PREFIX = "ALL_RECOMMENDED:"

DEFAULT_CONTENT_SUGGESTIONS = [
    "Try asking for 'family adventure movies' or 'animated films'.",
    "Request 'comedies', 'nature documentaries', or 'uplifting stories'.",
    "Describe the mood or type of story you enjoy, like 'fun', 'exciting', or 'heartwarming'.",
    "Ask for movies suitable for all ages or for a family movie night.",
]

SECURITY_BLOCKED_SUGGESTIONS = [
    "Describe the kind of movie you would like to watch.",
    "Mention genres, moods, or movies you already enjoy.",
    "Keep your request focused on movie recommendations.",
]

BLOCKED_REFERENCES_SUGGESTIONS = ["Remove inappropriate movies or try different ones."]

MISSING_DESCRIPTION_REASONING = "Description is required."
MISSING_DESCRIPTION_SUGGESTIONS = ["Please provide a description."]

RANDOM_SELECTION_REASONING = "Selected randomly among not-yet-recommended movies."
CYCLE_RESET_REASONING = "All available movies have been recommended. Starting a new cycle."
SECURITY_BLOCKED_REASONING = "Security threat detected: User attempting to exploit system"
BLOCKED_REFERENCES_REASONING = "Some movies were blocked by content filter"
INTERNAL_ERROR_MESSAGE = "Failed to generate recommendation"
