# styles/tests.py
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient
from rest_framework import status


class StyleCatalogTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_theme_catalog(self):
        response = self.client.get(reverse("style-themes"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        names = [preset["name"] for preset in response.data["presets"]]
        self.assertIn("modern", names)
        self.assertEqual(len(names), 8)
        self.assertIn("Glassmorphism", response.data["css_templates"])

    def test_filter_catalog(self):
        response = self.client.get(reverse("style-filters"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        vintage = next(preset for preset in response.data["presets"] if preset["name"] == "Vintage")
        self.assertIn("sepia(80%)", vintage["filter"])
        self.assertEqual(response.data["ranges"]["hue_rotate"], (-180, 180))

    def test_shadow_catalog(self):
        response = self.client.get(reverse("style-shadows"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        inset = next(preset for preset in response.data["presets"] if preset["name"] == "Inset")
        self.assertTrue(inset["box_shadow"].startswith("inset "))

    def test_pattern_catalog(self):
        response = self.client.get(reverse("style-patterns"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ids = [pattern["id"] for pattern in response.data["patterns"]]
        self.assertEqual(len(ids), 10)
        self.assertIn("organic-shapes", ids)
        self.assertIn("wave-float", response.data["keyframes"])


class StylePreviewTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("style-preview")

    def test_preview_composes_shadow_and_pattern(self):
        response = self.client.post(self.url, {
            "theme": {"style": "dark", "primary_color": "#818cf8", "button_style": "pill"},
            "shadow_layers": [{"x": 0, "y": 4, "blur": 6, "spread": 0, "color": "#000000", "opacity": 15}],
            "pattern": {"id": "dots", "options": {"size": 3, "spacing": 24}},
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        presentation = response.data["presentation"]
        self.assertEqual(presentation["background"]["background"], "#0f172a")
        self.assertEqual(presentation["button"]["base"]["border-radius"], "9999px")
        self.assertEqual(presentation["box_shadow"], "0px 4px 6px 0px rgba(0, 0, 0, 0.15)")
        self.assertIn("circle at 24px 24px, #6366f1 3px", presentation["pattern"])
        self.assertEqual(response.data["theme"]["custom_shadow"], presentation["box_shadow"])
        self.assertEqual(len(response.data["shadow_layers"]), 1)
        self.assertTrue(response.data["shadow_layers"][0]["id"])

    def test_empty_pattern_clears(self):
        response = self.client.post(self.url, {
            "theme": {"background_pattern": "opacity: 0.3;"},
            "pattern": {"id": ""},
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["presentation"]["pattern"], "")

    def test_out_of_range_filter_rejected(self):
        response = self.client.post(self.url, {"theme": {"filters": {"blur": 100}}}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_pattern_rejected(self):
        response = self.client.post(self.url, {"theme": {}, "pattern": {"id": "zigzag"}}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_non_hex_colors_rejected(self):
        response = self.client.post(self.url, {
            "theme": {"text_color": "</style><script>x()</script>", "background_color": "red"},
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("text_color", response.data["theme"])
        self.assertIn("background_color", response.data["theme"])


class CustomCSSValidateTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("custom-css-validate")

    def test_valid(self):
        response = self.client.post(self.url, {"css": ".card { border-radius: 12px; }"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["is_valid"])
        self.assertEqual(response.data["errors"], [])
        self.assertEqual(response.data["formatted"], ".card {\n  border-radius: 12px;\n}")

    def test_invalid(self):
        response = self.client.post(self.url, {"css": ".card { border-radius 12px }"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["is_valid"])
        self.assertTrue(response.data["errors"])
        self.assertIsNone(response.data["formatted"])

    def test_unclosed_block(self):
        response = self.client.post(
            self.url, {"css": ".a { color: red; } @media screen { .b { color: blue;"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["is_valid"])
        self.assertTrue(any("Unclosed block" in error for error in response.data["errors"]))
