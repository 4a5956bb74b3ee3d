"""Arabic strings."""

from src.i18n.config import Dictionary

dictionary = Dictionary.model_validate(
    {
        "page": {
            "title": "الملف الشخصي",
            "subtitle": "تحديث معلوماتك الشخصية",
        },
        "form": {
            "name": {"label": "الاسم", "placeholder": "اسمك"},
            "email": {"label": "البريد الإلكتروني", "placeholder": "your.email@example.com"},
            "bio": {
                "label": "نبذة عنك",
                "placeholder": "أخبرنا عن نفسك...",
                "description": "الحد الأقصى 200 حرف",
            },
            "profile_picture": {
                "label": "صورة الملف الشخصي",
                "description": "تحميل صورة للملف الشخصي",
                "choose_image": "اختر صورة",
                "remove": "إزالة",
            },
            "submit": "حفظ الملف الشخصي",
            "submitting": "جاري الحفظ...",
        },
        "validation": {
            "id": {"required": "معرف الملف الشخصي مطلوب"},
            "name": {
                "required": "الاسم مطلوب",
                "min_length": "يجب أن يحتوي الاسم على حرفين على الأقل",
                "max_length": "لا يمكن أن يتجاوز الاسم 50 حرفًا",
            },
            "email": {
                "required": "البريد الإلكتروني مطلوب",
                "invalid": "يرجى إدخال عنوان بريد إلكتروني صالح",
            },
            "bio": {"max_length": "لا يمكن أن تتجاوز النبذة 200 حرف"},
            "avatar": {
                "invalid_type": "يرجى اختيار ملف صورة",
                "too_large": "يجب أن يكون حجم الصورة أقل من 5 ميغابايت",
            },
            "server": {
                "error": "خطأ في تقديم النموذج",
                "retry_later": "حدث خطأ غير متوقع. يرجى المحاولة مرة أخرى لاحقًا.",
            },
        },
        "notifications": {
            "success": "تم تحديث الملف الشخصي بنجاح!",
            "error": "فشل تحديث الملف الشخصي",
        },
    }
)
