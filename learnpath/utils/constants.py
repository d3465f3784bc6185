"""
Constants shared by the recommendation pipeline and the API layer.
"""

# Number of records in every recommendation set
RECOMMENDATION_COUNT = 6

# Recommendation categories requested from the model
ACADEMIC_TYPE = "Academic"
EXTRACURRICULAR_TYPE = "Extracurricular"

# Search-link templates: SEARCH_BASE_URL + <encoded topic> + suffix
SEARCH_BASE_URL = "https://www.google.com/search?q="
SEARCH_QUERY_MARKER = "google.com/search?q="

TRUSTED_COURSE_SITES = ("coursera.org", "edx.org", "khanacademy.org")

ACADEMIC_QUERY_SUFFIX = "+online+course+" + "+OR+".join(
    f"site:{site}" for site in TRUSTED_COURSE_SITES
)
EXTRACURRICULAR_QUERY_SUFFIX = "+workshop+OR+event+OR+volunteer"

# Characters left unescaped by a browser's encodeURIComponent
URI_COMPONENT_SAFE_CHARS = "-_.!~*'()"

# Some search hosts reject HEAD requests without a browser user agent
LINK_PROBE_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)

# Supabase tables
USER_PROFILES_TABLE = "user_profiles"
USER_RECOMMENDATIONS_TABLE = "user_recommendations"
