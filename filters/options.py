"""
Option lists for resource listings and the browse filters.
"""
from __future__ import annotations

SERVICE_DOMAINS = [
    "Housing & Shelter",
    "Domestic Violence & Safety",
    "Foster Care & Child Welfare",
    "Parenting & Family Support",
    "Food & Nutrition",
    "Clothing & Basic Needs",
    "Hygiene & Personal Care",
    "Healthcare & Mental Health",
    "Substance Use & Recovery",
    "Legal Aid & Advocacy",
    "Education & Youth Programs",
    "Employment & Job Training",
    "Immigration & Refugee Support",
    "Disability & Accessibility Support",
    "Financial Assistance",
    "Community & Mutual Aid",
    "Training & Resources",
]

POPULATIONS_SERVED = [
    "Infants and toddlers",
    "Young children",
    "Adolescents",
    "Transition-Age Youth",
    "Adults",
    "Women / Mothers",
    "Men / Fathers",
    "Parents",
    "Foster Parents",
    "Families",
    "LGBTQIA+",
    "BIPOC",
    "AAPI",
    "Middle Eastern",
    "Latina/Hispanic",
    "Elderly",
    "Survivors of Domestic Violence",
    "Foster / Kinship Families",
    "Individuals with Disabilities",
    "Immigrants / Refugees",
    "Justice-Involved Individuals",
    "Low-Income / Housing-Insecure Individuals",
]

ACCESS_METHODS = [
    "Self-Referral",
    "Professional Referral Required",
    "Agency Referral Only",
    "Walk-In",
    "Appointment Required",
    "Online Request",
    "Phone Request",
    "Emergency / Crisis Access",
]

ELIGIBILITY_CONSTRAINTS = [
    "Age Restrictions",
    "Income-Based Eligibility",
    "Residency Requirements",
    "Documentation Required",
    "Waitlist Likely",
    "Limited Capacity",
    "Emergency-Only",
]

ORGANIZATION_TYPES = [
    "Nonprofit Organization",
    "Government Agency",
    "Community-Based Organization",
    "Faith-Based Organization",
    "Mutual Aid / Grassroots",
    "Healthcare Provider",
    "Educational Organization",
]

# Geographic coverage values and the sub-selector each one enables
CITY_SPECIFIC = "City-specific"
COUNTY_WIDE = "County-wide"
REGIONAL = "Regional"
STATEWIDE = "Statewide"
NATIONAL = "Multi-state / National"

GEOGRAPHIC_COVERAGE_OPTIONS = [CITY_SPECIFIC, COUNTY_WIDE, REGIONAL, STATEWIDE, NATIONAL]

# Yes/no flags: (resource field, label)
BOOLEAN_FLAGS = [
    ("crisisServices", "Crisis services"),
    ("spanishSpeaking", "Spanish speaking"),
    ("transportationProvided", "Transportation provided"),
    ("interpretationAvailable", "Interpretation available"),
]

ENTRY_STATUSES = {
    "complete": "Complete",
    "stub": "Stub",
}
