# /assist/config/strings.py

# This file contains all fixed user-facing strings, making them easy to manage
# and update without changing application logic.

# Welcome messages, keyed by role
WELCOME_SELF = (
    "Hi! I'm here to help you apply for Delaware ASSIST benefits. I'll guide you "
    "through the application process step by step. Let's start with some basic information."
)

WELCOME_ON_BEHALF_OF_PARENT = (
    "Hi! I'm here to help you apply for Delaware ASSIST benefits on behalf of your parent. "
    "I'll guide you through the application process step by step. Let's start with some "
    "basic information about the person you're applying for."
)

# Flow engine responses
SECTION_TRANSITION = "Great! We've completed the \"{completed}\" section. Let's move on to \"{upcoming}\"."

APPLICATION_COMPLETE = (
    "Congratulations! You've completed the entire application. "
    "All your information has been recorded."
)

APPLICATION_COMPLETE_SHORT = "That's all! Application complete."

NO_ACTIVE_FIELD = "No active field"

NOTHING_MORE_TO_DO = "Application is complete or there's an error."

READY_TO_START = "Ready to start!"

CONFIRMATION = "Got it! {label}: {value}"

NOT_PROVIDED = "Not provided"

# Validation messages
REQUIRED_FIELD = "This field is required. Please provide an answer."
TEXT_EMPTY = "This field cannot be empty"
TEXT_TOO_LONG = "Please enter a shorter value (max {max_length} characters)"
INVALID_NUMBER = "Please enter a valid number"
INVALID_HOUSEHOLD_SIZE = "Household size must be a whole number between 1 and 20"
NEGATIVE_INCOME = "Income cannot be negative. Enter 0 if there is no income."
UNREALISTIC_INCOME = "Please enter a realistic income amount"
INVALID_DATE = "Please enter a valid date (e.g., 01/15/1980 or January 15, 1980)"
FUTURE_BIRTH_DATE = "Birth date cannot be in the future"
UNREALISTIC_BIRTH_DATE = "Please enter a realistic birth date"
NO_OPTIONS = "No options available"
UNRECOGNIZED_OPTION = "I didn't recognize that option. Please choose from: {options}"
NO_SELECTION = "Please select at least one option"
UNRECOGNIZED_SELECTIONS = "I didn't recognize: \"{unmatched}\". Available options: {options}"
DID_YOU_MEAN = " Did you mean \"{suggestion}\"?"
UNKNOWN_FIELD_TYPE = "Unknown field type"

# Eligibility placeholder
ELIGIBILITY_PENDING = "Pending eligibility review"

# Export document
EXPORT_TITLE = "Delaware Benefits Assistance"
EXPORT_SUBTITLE = "SNAP & WIC Application"
EXPORT_APPLICATION_DATE = "Application Date: {date}"
EXPORT_APPLICANT_TYPE = "Applicant Type: {applicant_type}"
EXPORT_APPLICANT_SELF = "Self Application"
EXPORT_APPLICANT_PARENT = "Application on Behalf of Parent"
EXPORT_BENEFITS_HEADING = "Selected Benefits"
EXPORT_FOOTER = (
    "This is an unofficial copy for your records. Please submit the official "
    "application through the Delaware ASSIST portal."
)
EXPORT_PAGE_NUMBER = "Page {number} of {count}"
EXPORT_FILENAME = "Delaware_Benefits_Application_{date}.pdf"
