SEED_COURSES = [
    {
        "title": "Responsible Use of AI Tools",
        "description": "Company rules for using AI assistants: data handling, review of generated output and reporting problems.",
        "category": "Compliance",
        "duration_minutes": 45,
        "is_published": True,
        "is_mandatory": True,
        "mandatory_for_role": "ALL",
        "lessons": [
            {
                "title": "What may be shared",
                "content": "Never paste customer data, credentials or unreleased financials into an external AI tool.",
                "duration_minutes": 10,
            },
            {
                "title": "Reviewing generated output",
                "content": "Generated text and code are drafts. A person checks facts, licences and security before anything is used.",
                "duration_minutes": 15,
            },
            {
                "title": "Check your understanding",
                "content": "Answer the questions below to finish the course.",
                "duration_minutes": 20,
                "quiz": {
                    "title": "Responsible use quiz",
                    "passing_score": 80,
                    "questions": [
                        {
                            "question": "Which of these may be pasted into an external AI tool?",
                            "question_type": "single_choice",
                            "options": [
                                "A customer's address",
                                "A public press release",
                                "A database password",
                            ],
                            "correct_answers": ["A public press release"],
                        },
                        {
                            "question": "Generated code can be merged without review.",
                            "question_type": "true_false",
                            "options": ["true", "false"],
                            "correct_answers": ["false"],
                        },
                        {
                            "question": "What must be checked before using generated output?",
                            "question_type": "multiple_choice",
                            "options": ["Facts", "Licences", "Font size", "Security"],
                            "correct_answers": ["Facts", "Licences", "Security"],
                        },
                        {
                            "question": "Which team receives reports of AI tool problems?",
                            "question_type": "text",
                            "options": [],
                            "correct_answers": ["security"],
                        },
                    ],
                },
            },
        ],
    },
    {
        "title": "Introduction to Machine Learning",
        "description": "Core ideas behind machine learning and neural networks for beginners.",
        "category": "AI/ML",
        "duration_minutes": 180,
        "is_published": True,
        "is_mandatory": False,
        "mandatory_for_role": "USER",
        "lessons": [
            {
                "title": "Supervised and unsupervised learning",
                "content": "Supervised models learn from labelled examples; unsupervised models look for structure in unlabelled data.",
                "duration_minutes": 60,
            },
            {
                "title": "Neural networks",
                "content": "Layers of weighted sums and non-linear activations, trained with gradient descent.",
                "duration_minutes": 120,
            },
        ],
    },
]

SEED_SERVICES = [
    {
        "name": "GPT-4 Turbo",
        "description": "Language model for text generation, code and data analysis.",
        "category": "Language Models",
        "url": "https://openai.com/gpt-4",
        "pricing": {"model": "paid", "price": 0.01, "currency": "USD", "period": "usage"},
        "features": ["Text generation", "Code analysis", "Translation"],
    },
    {
        "name": "Claude",
        "description": "AI assistant for long documents and complex tasks.",
        "category": "Language Models",
        "url": "https://claude.ai",
        "pricing": {"model": "freemium"},
        "features": ["Document analysis", "Programming", "Writing"],
    },
    {
        "name": "Stable Diffusion",
        "description": "Open-source image generation model.",
        "category": "Image Generation",
        "url": "https://stability.ai",
        "pricing": {"model": "free"},
        "features": ["Image generation", "Inpainting", "Upscaling"],
    },
    {
        "name": "Whisper API",
        "description": "Speech recognition and transcription.",
        "category": "Audio Processing",
        "url": "https://openai.com/research/whisper",
        "pricing": {"model": "paid", "price": 0.006, "currency": "USD", "period": "usage"},
        "features": ["Transcription", "Speech translation"],
    },
]
