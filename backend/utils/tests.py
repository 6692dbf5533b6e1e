# utils/tests.py
import re
import base64
import io

from django.test import SimpleTestCase
from PIL import Image

from utils.colors import hex_to_rgba, complementary_color, with_alpha_suffix
from utils.custom_css import validate_custom_css, validate_declarations, append_template, format_css, CSS_TEMPLATES
from utils.filters import (
    FilterSettings, DropShadow, compose_filter, clamp_filters, apply_filter_preset,
)
from utils.identifiers import (
    create_slug, generate_unique_slug, generate_edit_token, format_whatsapp, validate_whatsapp,
    whatsapp_booking_url, instagram_url,
)
from utils.patterns import PATTERNS, PatternOptions, generate_pattern, render_pattern, required_keyframes
from utils.shadows import ShadowLayer, ShadowStack, compose_box_shadow
from utils.textures import generate_noise_texture
from utils.themes import (
    Theme, THEME_PRESETS, apply_theme_preset, resolve_background, resolve_button, resolve_font,
    resolve_text, build_stylesheet, parse_gradient_stops, enhance_theme, is_background_value, sanitize_theme,
)

IDENTITY_FILTER = (
    "blur(0px) brightness(100%) contrast(100%) saturate(100%) hue-rotate(0deg) "
    "grayscale(0%) sepia(0%) invert(0%) opacity(100%)"
)


class SlugTests(SimpleTestCase):
    def test_create_slug(self):
        """Punctuation runs collapse into one hyphen"""
        self.assertEqual(create_slug("Tony's Barbershop!"), "tony-s-barbershop")
        self.assertEqual(create_slug("  Joe's   Cafe  "), "joe-s-cafe")
        self.assertEqual(create_slug("!!!"), "")

    def test_create_slug_is_idempotent(self):
        for name in ["Bella Salon", "Café #1", "--Fit & Strong--"]:
            slug = create_slug(name)
            self.assertEqual(create_slug(slug), slug)
            self.assertRegex(slug, r"^[a-z0-9]+(-[a-z0-9]+)*$|^$")

    def test_generate_unique_slug_appends_counter(self):
        taken = {"bella", "bella-1"}
        self.assertEqual(generate_unique_slug("Bella", exists=taken.__contains__), "bella-2")
        self.assertEqual(generate_unique_slug("Bella", exists=lambda slug: slug == "bella"), "bella-1")
        self.assertEqual(generate_unique_slug("Bella", exists=lambda slug: False), "bella")

    def test_generate_unique_slug_empty_name(self):
        """Names without letters or digits fall back to a generic base"""
        self.assertEqual(generate_unique_slug("???", exists=lambda slug: False), "business")


class IdentifierTests(SimpleTestCase):
    def test_edit_token_shape(self):
        token = generate_edit_token()
        self.assertTrue(re.fullmatch(r"[0-9a-z]+", token))
        self.assertLessEqual(len(token), 26)
        self.assertNotEqual(token, generate_edit_token())

    def test_whatsapp_format_and_validate(self):
        self.assertEqual(format_whatsapp("+1 (234) 567-8901"), "12345678901")
        self.assertTrue(validate_whatsapp("+1 (234) 567-8901"))
        self.assertFalse(validate_whatsapp("12345"))
        self.assertFalse(validate_whatsapp("1" * 16))

    def test_booking_url(self):
        url = whatsapp_booking_url("+1 234 567 8901", "Haircut")
        self.assertEqual(url, "https://wa.me/12345678901?text=Hi%2C%20I%20want%20to%20book%20Haircut")

    def test_instagram_url(self):
        self.assertEqual(instagram_url("@joescafe"), "https://instagram.com/joescafe")
        self.assertIsNone(instagram_url(""))


class ColorTests(SimpleTestCase):
    def test_hex_to_rgba(self):
        self.assertEqual(hex_to_rgba("#6366f1", 0.5), "rgba(99, 102, 241, 0.5)")
        self.assertEqual(hex_to_rgba("not-a-color", 1), "rgba(0, 0, 0, 1)")

    def test_complementary_and_alpha(self):
        self.assertEqual(complementary_color("#000000"), "#ffffff")
        self.assertEqual(with_alpha_suffix("#6366f1", "66"), "#6366f166")
        self.assertEqual(with_alpha_suffix("red", "66"), "red")


class FilterTests(SimpleTestCase):
    def test_identity_filter(self):
        """All nine functions are present even at their identity values"""
        settings = FilterSettings()
        self.assertTrue(settings.is_identity)
        self.assertEqual(compose_filter(settings), IDENTITY_FILTER)

    def test_order_is_fixed(self):
        composed = compose_filter(FilterSettings(sepia=80, blur=2))
        names = re.findall(r"([a-z-]+)\(", composed)
        self.assertEqual(names, [
            "blur", "brightness", "contrast", "saturate", "hue-rotate", "grayscale", "sepia", "invert", "opacity",
        ])
        self.assertTrue(composed.startswith("blur(2px)"))
        self.assertIn("sepia(80%)", composed)

    def test_drop_shadow_only_with_blur(self):
        self.assertNotIn("drop-shadow", compose_filter(FilterSettings(drop_shadow=DropShadow(x=4, y=4))))
        composed = compose_filter(FilterSettings(drop_shadow=DropShadow(x=2, y=3, blur=5, color="#ff0000")))
        self.assertTrue(composed.endswith("drop-shadow(2px 3px 5px #ff0000)"))

    def test_clamp_filters(self):
        clamped = clamp_filters(FilterSettings(blur=50, hue_rotate=-500, drop_shadow=DropShadow(blur=99)))
        self.assertEqual(clamped.blur, 20)
        self.assertEqual(clamped.hue_rotate, -180)
        self.assertEqual(clamped.drop_shadow.blur, 30)

    def test_presets_replace(self):
        vintage = apply_filter_preset("Vintage")
        self.assertEqual((vintage.sepia, vintage.contrast, vintage.brightness), (80, 120, 110))
        self.assertEqual(vintage.blur, 0)
        self.assertTrue(apply_filter_preset("None").is_identity)
        with self.assertRaises(KeyError):
            apply_filter_preset("Sparkle")

    def test_from_dict_tolerates_missing_keys(self):
        settings = FilterSettings.from_dict({"grayscale": 100})
        self.assertEqual(settings.grayscale, 100)
        self.assertEqual(settings.brightness, 100)


class ShadowTests(SimpleTestCase):
    def test_single_layer_css(self):
        layer = ShadowLayer(x=0, y=4, blur=6, spread=0, color="#000000", opacity=15)
        self.assertEqual(layer.to_css(), "0px 4px 6px 0px rgba(0, 0, 0, 0.15)")

    def test_inset_and_order(self):
        layers = [
            ShadowLayer(x=1, y=1, blur=1, color="#ffffff", opacity=100),
            ShadowLayer(x=2, y=2, blur=2, color="#000000", opacity=50, inset=True),
        ]
        self.assertEqual(
            compose_box_shadow(layers),
            "1px 1px 1px 0px rgba(255, 255, 255, 1), inset 2px 2px 2px 0px rgba(0, 0, 0, 0.5)",
        )

    def test_stack_never_empty(self):
        stack = ShadowStack()
        only = stack.layers[0]
        self.assertFalse(stack.remove_layer(only.id))
        self.assertEqual(len(stack.layers), 1)

        added = stack.add_layer()
        self.assertTrue(stack.remove_layer(only.id))
        self.assertEqual([layer.id for layer in stack.layers], [added.id])

    def test_duplicate_offsets_copy(self):
        stack = ShadowStack([ShadowLayer(x=1, y=1, blur=4, opacity=20)])
        copy = stack.duplicate_layer(stack.layers[0].id)
        self.assertEqual((copy.x, copy.y, copy.blur), (3, 3, 4))
        self.assertNotEqual(copy.id, stack.layers[0].id)

    def test_preset_and_update(self):
        stack = ShadowStack()
        stack.apply_preset("Inset")
        self.assertTrue(stack.css.startswith("inset "))
        stack.update_layer(stack.layers[0].id, inset=False)
        self.assertTrue(stack.css.startswith("0px 2px 4px"))
        with self.assertRaises(KeyError):
            stack.update_layer("missing", x=1)

    def test_from_list(self):
        stack = ShadowStack.from_list([{"x": 0, "y": 4, "blur": 6, "color": "#000000", "opacity": 15}])
        self.assertEqual(stack.css, "0px 4px 6px 0px rgba(0, 0, 0, 0.15)")
        self.assertTrue(stack.to_list()[0]["id"])

        # An empty list is the resting single layer
        self.assertEqual(len(ShadowStack.from_list([]).layers), 1)


class PatternTests(SimpleTestCase):
    def test_every_pattern_generates(self):
        for pattern_id in PATTERNS:
            declarations = generate_pattern(pattern_id, PatternOptions(), seed=1)
            self.assertIn("background-image", declarations)
            self.assertIn("mix-blend-mode", declarations)
            self.assertTrue(validate_declarations(render_pattern(pattern_id, seed=1)).is_valid, pattern_id)

    def test_dots_declarations(self):
        declarations = generate_pattern("dots", PatternOptions(size=2, spacing=20, opacity=30))
        self.assertEqual(
            declarations["background-image"],
            "radial-gradient(circle at 20px 20px, #6366f1 2px, transparent 2px)",
        )
        self.assertEqual(declarations["background-size"], "40px 40px")
        self.assertEqual(declarations["opacity"], "0.3")

    def test_clear_and_unknown(self):
        self.assertEqual(render_pattern(""), "")
        self.assertEqual(render_pattern(None), "")
        with self.assertRaises(KeyError):
            generate_pattern("zigzag")

    def test_animation_keyframes(self):
        self.assertEqual(required_keyframes("waves", PatternOptions(animation=True)), ["wave-float"])
        self.assertEqual(required_keyframes("waves", PatternOptions()), [])
        self.assertEqual(required_keyframes("dots", PatternOptions(animation=True)), [])
        self.assertIn("animation: organic-morph", render_pattern("organic-shapes", PatternOptions(animation=True)))

    def test_options_clamped(self):
        options = PatternOptions(size=50, opacity=0, blend_mode="bogus").clamped()
        self.assertEqual((options.size, options.opacity, options.blend_mode), (20, 5, "normal"))

    def test_noise_texture(self):
        uri = generate_noise_texture(8, 100, seed=3)
        self.assertTrue(uri.startswith("data:image/png;base64,"))
        self.assertEqual(uri, generate_noise_texture(8, 100, seed=3))

        image = Image.open(io.BytesIO(base64.b64decode(uri.split(",", 1)[1])))
        self.assertEqual(image.size, (8, 8))
        self.assertEqual(image.mode, "RGBA")
        self.assertEqual(image.getpixel((0, 0))[3], 255)


class CustomCSSTests(SimpleTestCase):
    def test_valid_css(self):
        self.assertTrue(validate_custom_css("").is_valid)
        self.assertTrue(validate_custom_css(".card { color: red; }").is_valid)
        for template in CSS_TEMPLATES.values():
            self.assertTrue(validate_custom_css(template["css"]).is_valid)

    def test_syntax_error(self):
        result = validate_custom_css(".card { color red; }")
        self.assertFalse(result.is_valid)
        self.assertTrue(result.errors)

    def test_markup_breakout(self):
        result = validate_custom_css("</style><script>alert(1)</script>")
        self.assertFalse(result.is_valid)
        self.assertIn("not allowed", result.errors[0])

    def test_unclosed_block(self):
        result = validate_custom_css(".a { color: red; } @media screen { .b { color: blue;")
        self.assertFalse(result.is_valid)
        self.assertIn("Unclosed block", result.errors[0])

        self.assertFalse(validate_custom_css(".a { color: red; } /* note").is_valid)
        self.assertTrue(validate_custom_css("@media screen { .b { color: blue; } }").is_valid)

    def test_declarations_reject_braces(self):
        self.assertTrue(validate_declarations("opacity: 0.3; background-size: 20px 20px;").is_valid)
        self.assertFalse(validate_declarations("opacity: 1; } body { display: none").is_valid)

    def test_format_css(self):
        self.assertEqual(format_css(".a{color:red;top:0;}"), ".a {\n  color:red;\n  top:0;\n}")

    def test_append_template(self):
        css = append_template(".a { color: red; }", "Glassmorphism")
        self.assertTrue(css.startswith(".a { color: red; }\n\n/* Glassmorphism"))
        self.assertEqual(append_template("", "Glassmorphism"), CSS_TEMPLATES["Glassmorphism"]["css"])


class ThemeTests(SimpleTestCase):
    def test_presets_replace_whole_theme(self):
        theme = apply_theme_preset("neon")
        self.assertEqual(theme.style, "neon")
        self.assertEqual(theme.custom_css, "")
        self.assertIsNone(theme.filters)
        self.assertEqual(len(THEME_PRESETS), 8)

    def test_minimal_and_pastel_use_background_color(self):
        theme = Theme(style="minimal", background_color="#fafafa")
        self.assertEqual(resolve_background(theme)["background"], "#fafafa")
        theme = Theme(style="pastel", background_color="from-pink-400")
        self.assertEqual(resolve_background(theme)["background"], "#ffffff")

    def test_unknown_values_fall_back(self):
        theme = Theme(style="holographic", button_style="wobbly", font="comic")
        self.assertEqual(resolve_background(theme)["background"], "#ffffff")
        self.assertEqual(resolve_button(theme)["base"]["border-radius"], "0.5rem")
        self.assertEqual(resolve_font(theme.font)["family_class"], "sans")

    def test_gradient_background(self):
        theme = apply_theme_preset("sunset")
        self.assertEqual(
            resolve_background(theme)["background"],
            "linear-gradient(to bottom right, #fbbf24, #f97316, #f43f5e)",
        )
        self.assertEqual(parse_gradient_stops("from-[#000000] to-[#ffffff]/50"), ["#000000", "rgba(255, 255, 255, 0.5)"])

    def test_enhance_flat_gradient(self):
        theme = enhance_theme(Theme(style="gradient", primary_color="#000000", background_color="#ffffff"))
        self.assertEqual(theme.background_color, "from-[#000000] to-[#ffffff]")

        # Without a usable primary color the theme is left alone
        theme = enhance_theme(Theme(style="gradient", primary_color="red", background_color="#ffffff"))
        self.assertEqual(theme.background_color, "#ffffff")

    def test_background_values(self):
        self.assertTrue(is_background_value("#0f172a"))
        self.assertTrue(is_background_value("from-violet-400/20 via-purple-400/20 to-[#818cf8]"))
        self.assertFalse(is_background_value(""))
        self.assertFalse(is_background_value("from-amber-400 url(x)"))
        self.assertFalse(is_background_value("#fff; } body {"))

    def test_sanitize_leaves_valid_theme(self):
        theme = apply_theme_preset("glass")
        self.assertIs(sanitize_theme(theme), theme)

    def test_stylesheet_drops_unsafe_values(self):
        breakout = "</style><script>x()</script>"
        theme = Theme(
            primary_color=breakout,
            text_color=breakout,
            background_color=breakout,
            custom_shadow=f"0 0 1px #000; {breakout}",
            background_pattern=f"opacity: 1; }} {breakout}",
            filters=FilterSettings(drop_shadow=DropShadow(blur=4, color=breakout)),
        )

        with self.assertLogs("utils.themes", level="WARNING"):
            stylesheet = build_stylesheet(theme)

        self.assertNotIn("<script>", stylesheet)
        self.assertNotIn("</style", stylesheet)
        self.assertIn(".tapbook-text { color: #1e293b; }", stylesheet)
        self.assertIn("background: #6366f1;", stylesheet)
        self.assertNotIn(".tapbook-card", stylesheet)
        self.assertNotIn(".tapbook-pattern", stylesheet)
        self.assertNotIn("filter:", stylesheet)

    def test_brutal_and_ghost_ignore_style(self):
        for style in ("minimal", "neon", "glass"):
            brutal = resolve_button(Theme(style=style, button_style="brutal"))
            self.assertEqual(brutal["base"]["border"], "4px solid #000000")
            ghost = resolve_button(Theme(style=style, button_style="ghost", primary_color="#123456"))
            self.assertEqual(ghost["base"]["background"], "transparent")
            self.assertEqual(ghost["hover"]["background"], "#123456")

    def test_neon_text(self):
        text = resolve_text(Theme(style="neon", text_color="#00ff00"))
        self.assertEqual(text["text-shadow"], "0 0 10px #00ff00")

    def test_stylesheet_skips_invalid_custom_css(self):
        valid = build_stylesheet(Theme(custom_css=".x { color: red; }"))
        self.assertIn(".x { color: red; }", valid)

        invalid = build_stylesheet(Theme(custom_css="</style><script>alert(1)</script>"))
        self.assertNotIn("<script>", invalid)
        self.assertIn(".tapbook-page", invalid)

    def test_stylesheet_includes_pattern_keyframes(self):
        pattern = render_pattern("waves", PatternOptions(animation=True))
        stylesheet = build_stylesheet(Theme(background_pattern=pattern))
        self.assertIn(".tapbook-pattern {", stylesheet)
        self.assertIn("@keyframes wave-float", stylesheet)

    def test_filters_in_stylesheet(self):
        self.assertNotIn("filter:", build_stylesheet(Theme(filters=FilterSettings())))
        self.assertIn("sepia(80%)", build_stylesheet(Theme(filters=apply_filter_preset("Vintage"))))
