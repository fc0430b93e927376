APP_NAME = "BudgetWise"
APP_WIDTH = 520
APP_HEIGHT = 640

DEFAULT_DISPLAY_DATE_FORMAT = "MM/DD/YYYY"

EXPORT_FILE_PREFIX = "BudgetWise_Export_"
SHARE_DIALOG_TITLE = "Save BudgetWise Export"
EMAIL_SUBJECT = "BudgetWise Data Export"
EMAIL_BODY_TEMPLATE = (
    "Hi,\n\n"
    "Here's your BudgetWise data export.\n\n"
    "File: {file_name}\n"
    "Export Date: {export_date}\n\n"
    "Best regards,\n"
    "BudgetWise App"
)

MIME_TYPES = {
    "csv": "text/csv",
    "json": "application/json",
}

FILE_TYPE_LABELS = {
    "csv": "CSV files",
    "json": "JSON files",
}

# Window sizes for the preset date ranges, in days
RANGE_WINDOWS = {
    "last30days": 30,
    "last90days": 90,
    "last365days": 365,
}

RANGE_LABELS = {
    "all": "All Time",
    "last30days": "Last 30 Days",
    "last90days": "Last 90 Days",
    "last365days": "Last Year",
    "custom": "Custom Range",
}

FORMAT_LABELS = {
    "csv": "CSV (Excel compatible)",
    "json": "JSON (technical format)",
}
