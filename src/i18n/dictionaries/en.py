"""English strings."""

from src.i18n.config import Dictionary

dictionary = Dictionary.model_validate(
    {
        "page": {
            "title": "User Profile",
            "subtitle": "Update your personal information",
        },
        "form": {
            "name": {"label": "Name", "placeholder": "Your name"},
            "email": {"label": "Email", "placeholder": "your.email@example.com"},
            "bio": {
                "label": "Bio",
                "placeholder": "Tell us about yourself...",
                "description": "Max 200 characters",
            },
            "profile_picture": {
                "label": "Profile Picture",
                "description": "Upload a profile picture",
                "choose_image": "Choose Image",
                "remove": "Remove",
            },
            "submit": "Save Profile",
            "submitting": "Saving...",
        },
        "validation": {
            "id": {"required": "Profile ID is required"},
            "name": {
                "required": "Name is required",
                "min_length": "Name must be at least 2 characters long",
                "max_length": "Name cannot exceed 50 characters",
            },
            "email": {
                "required": "Email is required",
                "invalid": "Please enter a valid email address",
            },
            "bio": {"max_length": "Bio cannot exceed 200 characters"},
            "avatar": {
                "invalid_type": "Please select an image file",
                "too_large": "Image size should be less than 5MB",
            },
            "server": {
                "error": "Error submitting form",
                "retry_later": "An unexpected error occurred. Please try again later.",
            },
        },
        "notifications": {
            "success": "Profile updated successfully!",
            "error": "Failed to update profile",
        },
    }
)
