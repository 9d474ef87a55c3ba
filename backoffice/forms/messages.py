class ValidationMessages:
    """Localized validation texts built around a field's own label."""

    def __init__(self, t):
        self.t = t

    def required(self, label_key):
        return self.t("validation.required.field", field=self.t(label_key))

    def required_lang(self, label_key):
        return self.t("validation.required.allLanguages", field=self.t(label_key))

    def min_number(self, label_key, minimum):
        return self.t("validation.number.min", field=self.t(label_key), min=str(minimum))

    def min_images(self):
        return self.t("validation.required.minImages")

    def min_text_length(self, label_key, minimum):
        return self.t("validation.text.min", field=self.t(label_key), min=str(minimum))

    def max_text_length(self, label_key, maximum):
        return self.t("validation.text.max", field=self.t(label_key), max=str(maximum))
