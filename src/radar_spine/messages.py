"""User-facing messages for ingestion failures."""

TOO_MANY_RINGS = "More than 4 rings."
MISSING_HEADERS = (
    "Document is missing one or more required headers or they are misspelled. "
    'Check that your document contains headers for "name", "ring", "quadrant", "isNew", "description".'
)
MISSING_CONTENT = "Document is missing content."
SHEET_NOT_FOUND = "Oops! We can't find the Google Sheet you've entered. Can you check the URL?"
UNAUTHORIZED = "UNAUTHORIZED"
LOAD_PROBLEM = "Oops! It seems like there are some problems with loading your data. "
FAQ_HINT = "Please check the FAQs for possible solutions."
LOADING = "Building your radar... Your Technology Radar will be available in just a few seconds"


def unauthorized_message(identity_label: str) -> str:
    return (
        f"Oops! Looks like you are accessing this sheet using {identity_label}, "
        "which does not have permission. Try switching to another account."
    )
