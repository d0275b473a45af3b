# config/intelligence_config.py

# Keyword tables, description templates and baselines are hand-tuned domain
# content. Classification outcomes depend on the exact values below.

INTELLIGENCE_CONFIG = {
    "duplicate_detection": {
        "threshold": 0.8,
        "compared_fields": ["subject", "description", "sender"]
    },
    "priority_assignment": {
        # Evaluated top-down, first tier whose score reaches its cutoff wins
        "tier_thresholds": {
            "critical": 0.8,
            "high": 0.5,
            "medium": 0.3
        },
        "low_confidence": 0.8,
        "max_confidence": 1.0
    },
    "anomaly_detection": {
        "pending_status": "Pending",
        "default_processing_days": 7,
        "threshold_multiplier": 1.5,
        # Delay ratio cutoffs used for severity labels and monitoring filters
        "severity_ratios": {
            "critical": 2.0,
            "high": 1.5,
            "medium": 1.2
        }
    },
    "description_suggestions": {
        "max_results": 3,
        "index_discount": 0.1
    },
    "content_suggestions": {
        "max_results": 3,
        "pattern_words": 3,
        "recipient_similarity_threshold": 0.6
    }
}

PRIORITY_KEYWORDS = {
    "critical": [
        ("emergency", 1.0),
        ("urgent", 0.9),
        ("immediate", 0.9),
        ("critical", 1.0),
        ("court case", 0.95),
        ("legal notice", 0.9),
        ("supreme court", 0.95),
        ("high court", 0.9),
        ("disaster", 1.0),
        ("security breach", 0.95)
    ],
    "high": [
        ("important", 0.7),
        ("priority", 0.7),
        ("asap", 0.8),
        ("deadline", 0.6),
        ("meeting", 0.5),
        ("inspection", 0.6),
        ("audit", 0.6),
        ("compliance", 0.6)
    ],
    "medium": [
        ("review", 0.4),
        ("consideration", 0.3),
        ("approval", 0.4),
        ("processing", 0.3),
        ("verification", 0.3)
    ]
}

DESCRIPTION_TEMPLATES = [
    {
        "keywords": ["meeting", "schedule", "appointment"],
        "templates": [
            "This correspondence is regarding the scheduled meeting to discuss important matters. Please review the attached agenda and prepare necessary documentation.",
            "Reference is made to the forthcoming meeting scheduled for [date]. This communication serves as official confirmation and reminder of the same.",
            "In accordance with the administrative procedures, this letter is to confirm the meeting arrangement and to request your presence for deliberations on [topic]."
        ],
        "category": "Meeting Correspondence"
    },
    {
        "keywords": ["approval", "sanction", "permission"],
        "templates": [
            "This application is submitted for your kind consideration and approval. The matter has been examined in detail and found to be in order as per the established guidelines.",
            "Reference to the subject cited above, approval is requested for the proposed action. All necessary documentation has been attached for your perusal.",
            "In compliance with the administrative procedures, this matter requires your approval before proceeding further. The proposal has been thoroughly reviewed and recommended."
        ],
        "category": "Approval Request"
    },
    {
        "keywords": ["complaint", "grievance", "issue"],
        "templates": [
            "This communication is to bring to your kind attention the matter mentioned in the subject. Immediate intervention is requested to resolve the issue at the earliest.",
            "Reference to the subject, this is to formally register a complaint regarding the matter. Request for necessary action to be taken at the earliest opportunity.",
            "In accordance with the grievance redressal mechanism, this issue is being brought to your notice for appropriate action and resolution."
        ],
        "category": "Complaint/Grievance"
    },
    {
        "keywords": ["information", "details", "query"],
        "templates": [
            "This communication is to request necessary information regarding the subject matter. The details are required for official record and further processing.",
            "Reference to the subject, information is requested on the following points for administrative purposes. Your prompt response would be highly appreciated.",
            "In order to proceed with the matter at hand, certain clarifications and information are required. This communication seeks the same for official records."
        ],
        "category": "Information Request"
    },
    {
        "keywords": ["report", "submission", "document"],
        "templates": [
            "This is to submit the report/document as requested in the reference cited. The same has been prepared in accordance with the prescribed format and guidelines.",
            "Reference to the subject, the required report is hereby submitted for your kind perusal and necessary action. All relevant details have been included.",
            "In compliance with the instructions, the requested document is being submitted. The same has been verified and found to be complete in all respects."
        ],
        "category": "Report Submission"
    }
]

GENERIC_DESCRIPTIONS = [
    (
        "This communication is regarding the matter mentioned in the subject. Necessary action may please be taken at the earliest.",
        0.6
    ),
    (
        "Reference to the subject cited above, this is to bring to your notice the matter for appropriate action and necessary follow-up.",
        0.5
    )
]
GENERIC_CATEGORY = "General Correspondence"

# Placeholder baselines until averages are computed from historical data
DEFAULT_DEPARTMENT_AVERAGES = {
    "Administration": 5,
    "Finance": 7,
    "Human Resources": 4,
    "Information Technology": 3,
    "Operations": 6,
    "Legal": 8,
    "Procurement": 5,
    "Facilities": 4,
    "Public Relations": 3,
    "Audit & Compliance": 10
}
