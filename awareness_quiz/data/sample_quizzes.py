"""Sample security-awareness quizzes used to seed an empty store."""

SAMPLE_QUIZZES = [
    {
        "title": "Cybersecurity Fundamentals",
        "description": "Basic concepts every employee should know",
        "category": "cybersecurity",
        "difficulty": "easy",
        "time_limit": 15,
        "passing_score": 70,
        "max_attempts": 3,
        "tags": ["security", "basics"],
        "instructions": "Read each question carefully and pick the best answer.",
        "questions": [
            {
                "prompt": "What is the main job of a firewall?",
                "kind": "multiple-choice",
                "options": [
                    "Block unauthorized network traffic",
                    "Speed up the internet connection",
                    "Store passwords",
                    "Back up files",
                ],
                "correct_answer": "0",
                "explanation": "A firewall filters traffic between trusted and untrusted networks.",
                "points": 2,
            },
            {
                "prompt": "A strong password has at least 12 characters.",
                "kind": "true-false",
                "correct_answer": "True",
                "explanation": "Length is the single biggest factor in password strength.",
                "points": 1,
            },
            {
                "prompt": "What does the abbreviation MFA stand for?",
                "kind": "text",
                "correct_answer": "Multi-Factor Authentication",
                "explanation": "MFA requires more than one proof of identity.",
                "points": 2,
            },
        ],
    },
    {
        "title": "Phishing Awareness",
        "description": "Spot and report phishing attempts",
        "category": "phishing",
        "difficulty": "medium",
        "time_limit": 20,
        "passing_score": 80,
        "max_attempts": 2,
        "tags": ["phishing", "email"],
        "instructions": "Each question describes a situation you may meet in your inbox.",
        "questions": [
            {
                "prompt": "Which of these is a warning sign in an email?",
                "kind": "multiple-choice",
                "options": [
                    "Urgent demand for immediate action",
                    "Generic greeting such as 'Dear Customer'",
                    "Sender address that does not match the company",
                    "All of the above",
                ],
                "correct_answer": "3",
                "explanation": "Each of these is a common phishing indicator.",
                "points": 3,
            },
            {
                "prompt": "It is safe to open links in emails from unknown senders.",
                "kind": "true-false",
                "correct_answer": "False",
                "explanation": "Links from unknown senders may lead to malicious sites.",
                "points": 2,
            },
            {
                "prompt": "Describe what you would do after clicking a suspicious link.",
                "kind": "text",
                "correct_answer": "",
                "explanation": "Reviewed by the security team.",
                "points": 2,
            },
        ],
    },
    {
        "title": "Data Protection and Privacy",
        "description": "Principles of handling personal data",
        "category": "privacy",
        "difficulty": "hard",
        "time_limit": 25,
        "passing_score": 75,
        "max_attempts": 1,
        "tags": ["privacy", "gdpr"],
        "questions": [
            {
                "prompt": "What does GDPR stand for?",
                "kind": "text",
                "correct_answer": "General Data Protection Regulation",
                "points": 3,
            },
            {
                "prompt": "Consent is the only legal basis for processing personal data.",
                "kind": "true-false",
                "correct_answer": "False",
                "explanation": "Contracts, legal obligations and legitimate interests are others.",
                "points": 2,
            },
            {
                "prompt": "What is the maximum GDPR fine?",
                "kind": "multiple-choice",
                "options": [
                    "EUR 10,000",
                    "EUR 1 million",
                    "EUR 20 million or 4% of annual turnover",
                ],
                "correct_answer": "2",
                "points": 3,
            },
        ],
    },
]
