# /assist/workflows/definitions.py

"""
Delaware ASSIST form catalog.

This module defines the application's sections as pure data (no logic).
Sections are visited strictly in list order. Each section defines:
- id, title, description
- fields: ordered list of field definitions

Each field defines:
- id: stable identifier (question and validation policies key off it)
- label: display label
- type: one of text, number, date, select, radio, checkbox
- options: allowed option strings (select, radio and checkbox only)
- required: whether an empty answer is rejected
"""

from typing import Dict, Any, List

# Type definition for a field
FieldDefinition = Dict[str, Any]

# Type definition for a section
SectionDefinition = Dict[str, Any]

YES_NO = ["Yes", "No"]

BENEFIT_OPTIONS = [
    "Food Assistance (SNAP)",
    "Special Supplemental Nutrition (WIC)",
    "Cash Assistance (TANF)",
    "Medical Assistance (Medicaid)",
    "Child Care Assistance",
    "Energy Assistance (LIHEAP)",
    "General Assistance",
]

DELAWARE_ASSIST_SECTIONS: List[SectionDefinition] = [
    {
        "id": "basic-info",
        "title": "Basic Information",
        "description": "Name, date of birth and marital status",
        "fields": [
            {"id": "first-name", "label": "First Name", "type": "text", "required": True},
            {"id": "last-name", "label": "Last Name", "type": "text", "required": True},
            {"id": "date-of-birth", "label": "Date of Birth", "type": "date", "required": True},
            {
                "id": "marital-status",
                "label": "Marital Status",
                "type": "select",
                "options": ["Single", "Married", "Divorced", "Separated", "Widowed"],
                "required": True,
            },
        ],
    },
    {
        "id": "household",
        "title": "Household Information",
        "description": "Who lives with the applicant and where",
        "fields": [
            {"id": "household-size", "label": "Household Size", "type": "number", "required": True},
            {"id": "has-dependents", "label": "Has Dependents", "type": "radio", "options": YES_NO, "required": True},
            {"id": "pregnant", "label": "Pregnancy in Household", "type": "radio", "options": YES_NO, "required": True},
            {
                "id": "housing-status",
                "label": "Housing Status",
                "type": "select",
                "options": ["Own", "Rent", "Living with family or friends", "Homeless", "Other"],
                "required": True,
            },
        ],
    },
    {
        "id": "income-employment",
        "title": "Income & Employment",
        "description": "Employment status and all sources of household income",
        "fields": [
            {
                "id": "employment-status",
                "label": "Employment Status",
                "type": "select",
                "options": [
                    "Employed Full-time",
                    "Employed Part-time",
                    "Self-employed",
                    "Unemployed",
                    "Retired",
                    "Unable to work",
                ],
                "required": True,
            },
            {
                "id": "income-sources",
                "label": "Income Sources",
                "type": "checkbox",
                "options": [
                    "Wages",
                    "Self-employment",
                    "Social Security",
                    "SSI/Disability",
                    "Unemployment Benefits",
                    "Child Support",
                    "Pension",
                    "No Income",
                ],
                "required": False,
            },
            {"id": "monthly-income", "label": "Monthly Household Income", "type": "number", "required": True},
        ],
    },
    {
        "id": "health",
        "title": "Health Information",
        "description": "Disability information for the household",
        "fields": [
            {"id": "has-disability", "label": "Disability in Household", "type": "radio", "options": YES_NO, "required": True},
        ],
    },
    {
        "id": "benefits",
        "title": "Benefits Selection",
        "description": "Programs to apply for",
        "fields": [
            {
                "id": "benefit-types",
                "label": "Benefits Requested",
                "type": "checkbox",
                "options": BENEFIT_OPTIONS,
                "required": True,
            },
        ],
    },
]
