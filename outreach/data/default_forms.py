DEFAULT_FORM_CONFIGS = [
    {
        "form_type": "contact",
        "title": "Contact Us",
        "description": "Have a question? Send us a message and our team will get back to you.",
        "fields": [
            {"id": "name", "type": "text", "label": "Full Name", "placeholder": "Your name", "required": True},
            {"id": "email", "type": "email", "label": "Email Address", "placeholder": "your@email.com", "required": True},
            {"id": "phone", "type": "phone", "label": "Phone Number", "placeholder": "(555) 123-4567", "required": False},
            {
                "id": "subject",
                "type": "select",
                "label": "Subject",
                "required": True,
                "options": ["General Question", "Events", "Donations", "Partnerships", "Other"],
            },
            {"id": "message", "type": "textarea", "label": "Message", "placeholder": "How can we help?", "required": True},
        ],
        "submit_button_text": "Send Message",
        "success_message": "Thank you for reaching out! We'll get back to you within 2 business days.",
    },
    {
        "form_type": "volunteer",
        "title": "Volunteer With Us",
        "description": "Help adaptive athletes get in the game.",
        "fields": [
            {"id": "name", "type": "text", "label": "Full Name", "placeholder": "Your name", "required": True},
            {"id": "email", "type": "email", "label": "Email Address", "placeholder": "your@email.com", "required": True},
            {"id": "phone", "type": "phone", "label": "Phone Number", "placeholder": "(555) 123-4567", "required": True},
            {
                "id": "interests",
                "type": "multiselect",
                "label": "Areas of Interest",
                "required": True,
                "options": ["Event Support", "Coaching", "Transportation", "Fundraising", "Marketing"],
            },
            {
                "id": "availability",
                "type": "select",
                "label": "Availability",
                "required": False,
                "options": ["Weekdays", "Weekends", "Evenings", "Flexible"],
            },
            {"id": "experience", "type": "textarea", "label": "Relevant Experience", "required": False},
            {"id": "background_check", "type": "checkbox", "label": "I consent to a background check", "required": False},
        ],
        "submit_button_text": "Apply to Volunteer",
        "success_message": "Thank you for your interest in volunteering! We'll review your application and reach out soon.",
    },
    {
        "form_type": "grant_application",
        "title": "Equipment Grant Application",
        "description": "Apply for help covering the cost of adaptive sports equipment.",
        "fields": [
            {"id": "name", "type": "text", "label": "Full Name", "required": True},
            {"id": "email", "type": "email", "label": "Email Address", "required": True},
            {"id": "phone", "type": "phone", "label": "Phone Number", "required": False},
            {
                "id": "sport",
                "type": "select",
                "label": "Sport",
                "required": True,
                "options": ["Basketball", "Swimming", "Fitness", "Other"],
            },
            {"id": "need", "type": "textarea", "label": "What equipment do you need?", "required": True},
            {"id": "story", "type": "textarea", "label": "Tell us your story", "required": False},
        ],
        "submit_button_text": "Submit Application",
        "success_message": "Your application has been received. Our grants committee reviews applications monthly.",
    },
    {
        "form_type": "patient_referral",
        "title": "Patient Referral",
        "description": "Healthcare professionals can refer patients to our programs.",
        "fields": [
            {"id": "referrer_name", "type": "text", "label": "Your Name", "required": True},
            {"id": "referrer_email", "type": "email", "label": "Your Email", "required": True},
            {"id": "referrer_organization", "type": "text", "label": "Organization", "required": False},
            {"id": "referrer_role", "type": "text", "label": "Role", "required": False},
            {"id": "patient_name", "type": "text", "label": "Patient Name", "required": True},
            {"id": "patient_email", "type": "email", "label": "Patient Email", "required": False},
            {"id": "patient_phone", "type": "phone", "label": "Patient Phone", "required": False},
            {"id": "patient_needs", "type": "textarea", "label": "Patient Needs", "required": True},
            {"id": "additional_info", "type": "textarea", "label": "Additional Information", "required": False},
        ],
        "submit_button_text": "Submit Referral",
        "success_message": "Thank you for the referral! Our program team will contact the patient shortly.",
    },
    {
        "form_type": "equipment_donation",
        "title": "Donate Equipment",
        "description": "Gently used adaptive equipment changes lives.",
        "fields": [
            {"id": "name", "type": "text", "label": "Full Name", "required": True},
            {"id": "email", "type": "email", "label": "Email Address", "required": True},
            {"id": "phone", "type": "phone", "label": "Phone Number", "required": False},
            {"id": "equipment_type", "type": "text", "label": "Equipment Type", "required": True},
            {
                "id": "condition",
                "type": "select",
                "label": "Condition",
                "required": True,
                "options": ["New", "Like New", "Good", "Fair"],
            },
            {"id": "quantity", "type": "number", "label": "Quantity", "required": False},
            {"id": "available_from", "type": "date", "label": "Available From", "required": False},
            {"id": "details", "type": "textarea", "label": "Details", "required": False},
        ],
        "submit_button_text": "Offer Donation",
        "success_message": "Thank you for your generosity! We'll contact you to arrange pickup or drop-off.",
    },
    {
        "form_type": "corporate_sponsorship",
        "title": "Corporate Sponsorship",
        "description": "Partner with us to support adaptive athletes.",
        "fields": [
            {"id": "contact_name", "type": "text", "label": "Contact Name", "required": True},
            {"id": "company", "type": "text", "label": "Company", "required": True},
            {"id": "email", "type": "email", "label": "Email Address", "required": True},
            {"id": "phone", "type": "phone", "label": "Phone Number", "required": False},
            {
                "id": "sponsorship_level",
                "type": "select",
                "label": "Sponsorship Level",
                "required": False,
                "options": ["Bronze", "Silver", "Gold", "Platinum", "Not sure yet"],
            },
            {"id": "message", "type": "textarea", "label": "Message", "required": False},
        ],
        "submit_button_text": "Start the Conversation",
        "success_message": "Thank you for your interest in partnering with us!",
    },
]

DEFAULT_SETTINGS = {
    "donation_url": "https://www.zeffy.com/donation-form/adapt-to-life",
}

PUBLIC_SETTING_KEYS = {"donation_url"}
