# businesses/tests.py
from io import StringIO

from django.core.management import call_command
from django.test import TestCase, TransactionTestCase, override_settings
from django.urls import reverse
from rest_framework.test import APIClient
from rest_framework import status

from utils.filters import FilterSettings
from utils.patterns import PatternOptions
from .editor import EditorSession
from .models import Business
from .wizard import CreateWizard, WizardStep, WizardValidationError
from . import services

TAPBOOK_TEST_SETTINGS = {
    "PUBLIC_BASE_URL": "https://tapbook.example",
    "AUTOSAVE_IDLE_SECONDS": 2.5,
    "SUCCESS_BANNER_MESSAGE": "Your page is live!",
}


def create_business(name="Joe's Cafe", **overrides):
    fields = {
        "name": name,
        "whatsapp": "12345678901",
        "instagram": "joescafe",
        "services": [{"name": "Coffee", "price": "$3"}],
        "links": [
            {"id": "site", "title": "Website", "url": "joescafe.com", "type": "url", "icon": "default", "visible": True},
            {"id": "hidden", "title": "Old menu", "url": "https://old.example", "type": "url",
             "icon": "default", "visible": False},
        ],
    }
    fields.update(overrides)
    return services.create_business(**fields)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@override_settings(TAPBOOK=TAPBOOK_TEST_SETTINGS)
class BusinessIntakeTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("business-intake")

    def test_create_business(self):
        """The intake form creates a page and hands back the edit token once"""
        response = self.client.post(self.url, {
            "name": "Joe's Cafe",
            "whatsapp": "+1 (234) 567-8901",
            "instagram": "@joescafe",
            "services": [{"name": "Coffee", "price": "$3"}, {"name": "", "price": "$1"}],
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        slug = response.data["slug"]
        token = response.data["edit_token"]
        self.assertEqual(slug, "joe-s-cafe")
        self.assertEqual(response.data["redirect"], f"/joe-s-cafe?success=true&edit={token}")

        # Check the stored record
        business = Business.objects.get(slug=slug)
        self.assertEqual(business.whatsapp, "12345678901")
        self.assertEqual(business.services, [{"name": "Coffee", "price": "$3"}])
        self.assertEqual(business.edit_token, token)
        self.assertEqual(business.theme["style"], "minimal")
        self.assertEqual(business.version, 0)

    def test_duplicate_names_get_numbered_slugs(self):
        payload = {"name": "Bella", "whatsapp": "12345678901", "services": [{"name": "Cut", "price": "20"}]}
        first = self.client.post(self.url, payload, format="json")
        second = self.client.post(self.url, payload, format="json")

        self.assertEqual(first.data["slug"], "bella")
        self.assertEqual(second.data["slug"], "bella-1")
        self.assertNotEqual(first.data["edit_token"], second.data["edit_token"])

    def test_theme_preset_and_business_type(self):
        response = self.client.post(self.url, {
            "name": "Night Owl",
            "whatsapp": "12345678901",
            "services": [{"name": "Espresso", "price": "$2"}],
            "theme_preset": "neon",
            "business_type": "cafe",
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        business = Business.objects.get(slug=response.data["slug"])
        self.assertEqual(business.theme["style"], "neon")
        self.assertEqual(business.profile["business_type"], "cafe")

    def test_missing_name(self):
        response = self.client.post(self.url, {
            "name": "   ",
            "whatsapp": "12345678901",
            "services": [{"name": "Coffee", "price": "$3"}],
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["name"], ["Business name is required"])
        self.assertEqual(Business.objects.count(), 0)

    def test_invalid_whatsapp(self):
        response = self.client.post(self.url, {
            "name": "Joe's Cafe",
            "whatsapp": "12-34",
            "services": [{"name": "Coffee", "price": "$3"}],
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["whatsapp"], ["Please enter a valid WhatsApp number"])

    def test_requires_a_complete_service(self):
        """Services missing a name or price are dropped, leaving nothing to show"""
        response = self.client.post(self.url, {
            "name": "Joe's Cafe",
            "whatsapp": "12345678901",
            "services": [{"name": "Coffee", "price": ""}],
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["services"], ["At least one service is required"])

    def test_links_instead_of_services(self):
        response = self.client.post(self.url, {
            "name": "Link Only",
            "whatsapp": "12345678901",
            "links": [{"title": "Shop", "url": "https://shop.example"}],
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        links = Business.objects.get(slug="link-only").links
        self.assertEqual(len(links), 1)
        self.assertTrue(links[0]["id"])


@override_settings(TAPBOOK=TAPBOOK_TEST_SETTINGS)
class BusinessPublicViewTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.business = create_business()
        self.url = reverse("business-public", kwargs={"slug": self.business.slug})

    def test_public_page(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertNotIn("edit_token", response.data["business"])
        self.assertNotIn(self.business.edit_token, str(response.data))
        self.assertFalse(response.data["banner"]["show_success"])
        self.assertIsNone(response.data["edit_url"])
        self.assertEqual(response.data["public_url"], "https://tapbook.example/joe-s-cafe")

        # Only visible links, with hrefs resolved
        self.assertEqual([link["id"] for link in response.data["links"]], ["site"])
        self.assertEqual(response.data["links"][0]["href"], "https://joescafe.com")
        self.assertEqual(response.data["links"][0]["glyph"], "globe")

        actions = response.data["actions"]
        self.assertEqual(actions["instagram"], "https://instagram.com/joescafe")
        self.assertEqual(actions["call"], "tel:12345678901")
        self.assertEqual(
            actions["book"]["Coffee"],
            "https://wa.me/12345678901?text=Hi%2C%20I%20want%20to%20book%20Coffee",
        )
        self.assertIn(".tapbook-page", response.data["presentation"]["stylesheet"])

    def test_success_banner_and_edit_link(self):
        response = self.client.get(self.url, {"success": "true", "edit": "abc123"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["banner"]["show_success"])
        self.assertEqual(response.data["banner"]["message"], "Your page is live!")
        self.assertEqual(response.data["edit_url"], "https://tapbook.example/joe-s-cafe/edit?token=abc123")

    def test_stored_theme_cannot_close_style_element(self):
        """Theme values saved before validation are dropped or replaced when rendered"""
        business = create_business(name="Old Theme", theme={
            "style": "neon",
            "primary_color": "red;}</style><script>x()</script>",
            "text_color": "</style><script>x()</script>",
            "custom_shadow": "0 0 1px #000; } body { display: none",
            "background_pattern": "opacity: 1; } </style><script>x()</script>",
            "filters": {"drop_shadow": {"blur": 4, "color": "</style><script>x()</script>"}},
        })

        with self.assertLogs("utils.themes", level="WARNING"):
            response = self.client.get(reverse("business-public", kwargs={"slug": business.slug}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        presentation = response.data["presentation"]
        self.assertNotIn("<script>", presentation["stylesheet"])
        self.assertNotIn("</style", presentation["stylesheet"])
        self.assertNotIn("display: none", presentation["stylesheet"])
        self.assertEqual(presentation["text"]["color"], "#1e293b")
        self.assertEqual(presentation["box_shadow"], "")
        self.assertEqual(presentation["pattern"], "")
        self.assertEqual(presentation["filter"], "")

    def test_unknown_slug(self):
        response = self.client.get(reverse("business-public", kwargs={"slug": "nobody"}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "Business not found")


class BusinessEditViewTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.business = create_business()
        self.url = reverse("business-edit", kwargs={"slug": self.business.slug})
        self.token = self.business.edit_token

    def edit_url(self, token):
        return f"{self.url}?token={token}"

    def test_get_requires_token(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_get_with_wrong_token(self):
        response = self.client.get(self.edit_url("wrong"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["error"], "Invalid edit token or business not found")

    def test_unknown_slug_looks_like_wrong_token(self):
        url = reverse("business-edit", kwargs={"slug": "nobody"})
        response = self.client.get(f"{url}?token={self.token}")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["error"], "Invalid edit token or business not found")

    def test_get_with_token(self):
        response = self.client.get(self.edit_url(self.token))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["edit_token"], self.token)
        self.assertEqual(response.data["version"], 0)

    def test_update_with_wrong_token_changes_nothing(self):
        response = self.client.put(self.edit_url("wrong"), {
            "name": "Hijacked",
            "whatsapp": "12345678901",
            "services": [{"name": "Coffee", "price": "$3"}],
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.business.refresh_from_db()
        self.assertEqual(self.business.name, "Joe's Cafe")

    def test_full_update(self):
        """Slug and token never change, even when sent"""
        response = self.client.put(self.edit_url(self.token), {
            "name": "Joe's Coffee House",
            "whatsapp": "+44 7700 900123",
            "services": [{"name": "Latte", "price": "$4"}],
            "slug": "stolen",
            "edit_token": "new-token",
            "theme": {"style": "dark", "button_style": "pill"},
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.business.refresh_from_db()
        self.assertEqual(self.business.name, "Joe's Coffee House")
        self.assertEqual(self.business.whatsapp, "447700900123")
        self.assertEqual(self.business.slug, "joe-s-cafe")
        self.assertEqual(self.business.edit_token, self.token)

        # Partial themes are stored as complete documents
        self.assertEqual(self.business.theme["style"], "dark")
        self.assertEqual(self.business.theme["font"], "inter")
        self.assertIn("custom_css", self.business.theme)

    def test_invalid_custom_css_rejected(self):
        response = self.client.patch(self.edit_url(self.token), {
            "theme": {"custom_css": "</style><script>alert(1)</script>"},
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("custom_css", response.data["theme"])

    def test_theme_colors_must_be_hex(self):
        response = self.client.put(self.edit_url(self.token), {
            "name": "Joe's Cafe",
            "whatsapp": "12345678901",
            "services": [{"name": "Coffee", "price": "$3"}],
            "theme": {
                "text_color": "</style><script>x()</script>",
                "primary_color": "red",
                "background_color": "#fff; } body { display: none",
                "filters": {"drop_shadow": {"blur": 4, "color": "black)"}},
            },
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ("text_color", "primary_color", "background_color", "filters"):
            self.assertIn(field, response.data["theme"])

        # Check nothing was stored
        self.business.refresh_from_db()
        self.assertEqual(self.business.theme["text_color"], "#1e293b")

    def test_gradient_background_accepted(self):
        response = self.client.patch(self.edit_url(self.token), {
            "theme": {"style": "gradient", "background_color": "from-amber-400 via-orange-500 to-[#f43f5e]/80"},
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.business.refresh_from_db()
        self.assertEqual(self.business.theme["background_color"], "from-amber-400 via-orange-500 to-[#f43f5e]/80")

    def test_unclosed_custom_css_rejected(self):
        response = self.client.patch(self.edit_url(self.token), {
            "theme": {"custom_css": ".a { color: red; } @media screen { .b { color: blue;"},
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("custom_css", response.data["theme"])

    def test_bio_length_limit(self):
        response = self.client.patch(self.edit_url(self.token), {"profile": {"bio": "x" * 161}}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_stale_version_rejected(self):
        response = self.client.patch(self.edit_url(self.token), {"name": "Version Three", "version": 3}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["version"], 3)

        response = self.client.patch(self.edit_url(self.token), {"name": "Version Two", "version": 2}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["version"], 3)

        self.business.refresh_from_db()
        self.assertEqual(self.business.name, "Version Three")

    def test_same_version_applies(self):
        services.update_business(self.business.slug, self.token, {"name": "First"}, version=1)
        business = services.update_business(self.business.slug, self.token, {"name": "Again"}, version=1)
        self.assertEqual(business.name, "Again")

    def test_update_without_version_overwrites(self):
        services.update_business(self.business.slug, self.token, {"name": "Auto"}, version=5)
        business = services.update_business(self.business.slug, self.token, {"name": "Manual"})

        self.assertEqual(business.name, "Manual")
        self.assertEqual(business.version, 5)


@override_settings(TAPBOOK=TAPBOOK_TEST_SETTINGS)
class EditorSessionTests(TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.saves = []
        self.session = EditorSession(
            {
                "slug": "joe-s-cafe",
                "name": "Joe's Cafe",
                "whatsapp": "12345678901",
                "services": [{"name": "Coffee", "price": "$3"}],
                "links": [
                    {"id": "a", "title": "A", "url": "https://a.example", "type": "url", "icon": "default", "visible": True},
                    {"id": "b", "title": "B", "url": "https://b.example", "type": "url", "icon": "default", "visible": True},
                ],
                "version": 0,
            },
            save=lambda payload, version: self.saves.append((payload, version)),
            clock=self.clock,
        )

    def test_debounced_save(self):
        """Edits keep pushing the deadline back; one save carries the last version"""
        self.session.update_content(name="Joe's")
        self.clock.now = 2.0
        self.session.update_theme(primary_color="#ff0000")
        self.assertEqual(self.session.version, 2)

        self.clock.now = 4.0
        self.assertFalse(self.session.tick())
        self.assertEqual(self.saves, [])

        self.clock.now = 4.5
        self.assertTrue(self.session.tick())
        payload, version = self.saves[0]
        self.assertEqual(version, 2)
        self.assertEqual(payload["name"], "Joe's")
        self.assertEqual(payload["theme"]["primary_color"], "#ff0000")

        self.clock.now = 10
        self.assertFalse(self.session.tick())
        self.assertEqual(len(self.saves), 1)

    def test_flush(self):
        self.assertFalse(self.session.flush())
        self.session.toggle_link("a")
        self.assertTrue(self.session.flush())
        self.assertFalse(self.session.dirty)
        self.assertFalse(self.saves[0][0]["links"][0]["visible"])

    def test_failed_save_retries_next_window(self):
        attempts = []

        def flaky_save(payload, version):
            attempts.append(version)
            if len(attempts) == 1:
                raise ConnectionError("store unavailable")

        self.session.save = flaky_save
        self.session.update_profile(bio="Best coffee in town")
        self.clock.now = 3

        with self.assertLogs("businesses.editor", level="ERROR"):
            self.assertFalse(self.session.tick())
        self.assertTrue(self.session.dirty)

        self.clock.now = 4
        self.assertFalse(self.session.tick())
        self.clock.now = 5.5
        self.assertTrue(self.session.tick())
        self.assertEqual(attempts, [1, 1])

    def test_stale_save_is_not_retried(self):
        def stale_save(payload, version):
            raise services.StaleVersionError(version, 9)

        self.session.save = stale_save
        self.session.update_content(name="Late")
        self.clock.now = 3

        with self.assertLogs("businesses.editor", level="WARNING"):
            self.assertFalse(self.session.tick())
        self.assertIsNone(self.session.deadline)

    def test_invalid_custom_css_is_withheld(self):
        result = self.session.set_custom_css(".card { color: red; }")
        self.assertTrue(result.is_valid)
        self.assertEqual(self.session.version, 1)

        result = self.session.set_custom_css("</style><script>alert(1)</script>")
        self.assertFalse(result.is_valid)
        self.assertEqual(self.session.version, 1)
        self.assertEqual(self.session.payload()["theme"]["custom_css"], ".card { color: red; }")
        self.assertEqual(self.session.draft_css, "</style><script>alert(1)</script>")

    def test_shadow_layers_compose_into_theme(self):
        layer = self.session.shadows.layers[0]
        self.session.update_shadow_layer(layer.id, y=4, blur=6, opacity=15)
        self.assertEqual(self.session.theme.custom_shadow, "0px 4px 6px 0px rgba(0, 0, 0, 0.15)")

        version = self.session.version
        self.assertFalse(self.session.remove_shadow_layer(layer.id))
        self.assertEqual(self.session.version, version)

        self.session.reset_shadows()
        self.assertEqual(self.session.theme.custom_shadow, "")

    def test_pattern_select_and_clear(self):
        self.session.select_pattern("dots", PatternOptions(size=3))
        self.assertIn("background-image: radial-gradient", self.session.theme.background_pattern)
        self.assertIn(".tapbook-pattern", self.session.preview()["stylesheet"])

        self.session.update_pattern_options(size=99)
        self.assertEqual(self.session.pattern_options.size, 20)

        self.session.clear_pattern()
        self.assertEqual(self.session.theme.background_pattern, "")

        with self.assertRaises(KeyError):
            self.session.select_pattern("zigzag")

    def test_theme_preset_replaces_everything(self):
        self.session.set_custom_css(".x { color: red; }")
        self.session.apply_filter_preset("Vintage")
        self.session.apply_theme_preset("midnight")

        self.assertEqual(self.session.theme.style, "dark")
        self.assertEqual(self.session.theme.custom_css, "")
        self.assertIsNone(self.session.theme.filters)

    def test_filters_are_clamped(self):
        self.session.set_filters(FilterSettings(brightness=500))
        self.assertEqual(self.session.theme.filters.brightness, 200)
        self.session.reset_filters()
        self.assertEqual(self.session.preview()["filter"], "")

    def test_link_operations(self):
        link = self.session.add_link("Menu", "menu.example")
        self.session.move_link(link["id"], 0)
        self.assertEqual([item["id"] for item in self.session.links], [link["id"], "a", "b"])
        self.assertEqual(self.session.layout["link_order"], [link["id"], "a", "b"])

        self.session.update_link("a", title="Alpha")
        self.session.remove_link("b")
        self.assertEqual([item["title"] for item in self.session.links], ["Menu", "Alpha"])

        with self.assertRaises(KeyError):
            self.session.remove_link("missing")

    def test_unknown_link_type(self):
        with self.assertRaises(ValueError):
            self.session.add_link("Fax", "555-0100", type="fax")
        with self.assertRaises(ValueError):
            self.session.update_link("a", type="fax")

        # Check nothing changed and no save is pending
        self.assertEqual([link["type"] for link in self.session.links], ["url", "url"])
        self.assertFalse(self.session.dirty)

        self.session.update_link("a", type="email", url="hi@a.example")
        self.assertEqual(self.session.links[0]["type"], "email")

    def test_profile_bio_is_capped(self):
        self.session.update_profile(bio="x" * 200)
        self.assertEqual(len(self.session.profile["bio"]), 160)

    def test_reserved_theme_fields(self):
        with self.assertRaises(ValueError):
            self.session.update_theme(custom_css=".x {}")

    def test_theme_colors_are_checked(self):
        with self.assertRaises(ValueError):
            self.session.update_theme(text_color="</style><script>x()</script>")
        with self.assertRaises(ValueError):
            self.session.update_theme(background_color="red; } body {")
        self.assertEqual(self.session.theme.text_color, "#1e293b")
        self.assertFalse(self.session.dirty)

    def test_gradient_style_gets_gradient_background(self):
        """Switching to gradient with a flat background derives one from the primary color"""
        self.session.update_theme(style="gradient", primary_color="#000000", background_color="#ffffff")

        self.assertEqual(self.session.theme.background_color, "from-[#000000] to-[#ffffff]")
        self.assertEqual(
            self.session.preview()["background"]["background"],
            "linear-gradient(to bottom right, #000000, #ffffff)",
        )

    def test_saves_through_store(self):
        business = create_business()
        session = EditorSession.for_business(business, clock=self.clock)
        session.update_content(name="Joe's Diner")
        session.update_layout(services_style="list")
        self.assertTrue(session.flush())

        business.refresh_from_db()
        self.assertEqual(business.name, "Joe's Diner")
        self.assertEqual(business.layout["services_style"], "list")
        self.assertEqual(business.version, 2)

    def test_older_session_cannot_overwrite_newer(self):
        business = create_business()
        newer = EditorSession.for_business(business, clock=self.clock)
        older = EditorSession.for_business(business, clock=self.clock)

        for name in ("One", "Two", "Three"):
            newer.update_content(name=name)
        newer.flush()

        older.update_content(name="Stale")
        with self.assertLogs("businesses.editor", level="WARNING"):
            self.assertFalse(older.flush())

        business.refresh_from_db()
        self.assertEqual(business.name, "Three")


class CreateWizardTests(TestCase):
    def test_basic_info_required(self):
        wizard = CreateWizard()
        with self.assertRaises(WizardValidationError) as ctx:
            wizard.next()
        self.assertEqual(ctx.exception.messages, ["Business name is required", "Please choose a business type"])
        self.assertEqual(wizard.step, WizardStep.BASIC_INFO)

    def test_walk_through(self):
        wizard = CreateWizard()
        wizard.name = "Tony's Barbershop"
        wizard.business_type = "barber"
        self.assertTrue(wizard.next())
        self.assertEqual(wizard.step, WizardStep.PLATFORMS)

        # At least one platform before moving on
        with self.assertRaises(WizardValidationError):
            wizard.next()

        wizard.toggle_platform("instagram")
        wizard.toggle_platform("tiktok")
        self.assertTrue(wizard.next())
        self.assertEqual(wizard.step, WizardStep.HANDLES)
        self.assertFalse(wizard.next())

        wizard.set_handle("instagram", "@tonycuts")
        wizard.set_handle("tiktok", "tonycuts")
        links = wizard.build_links()
        self.assertEqual([link["url"] for link in links], [
            "https://instagram.com/tonycuts",
            "https://tiktok.com/@tonycuts",
        ])
        self.assertEqual(links[1]["icon"], "tiktok")

        payload = wizard.to_intake_payload("+1 234 567 8901", [{"name": "Fade", "price": "$25"}])
        self.assertEqual(payload["name"], "Tony's Barbershop")
        self.assertEqual(payload["business_type"], "barber")
        self.assertEqual(payload["instagram"], "@tonycuts")

    def test_back(self):
        wizard = CreateWizard()
        self.assertFalse(wizard.back())
        wizard.name = "Salon"
        wizard.business_type = "salon"
        wizard.next()
        self.assertTrue(wizard.back())
        self.assertEqual(wizard.step, WizardStep.BASIC_INFO)

    def test_payload_is_accepted_by_intake(self):
        wizard = CreateWizard()
        wizard.name = "Wizard Cafe"
        wizard.business_type = "cafe"
        wizard.next()
        wizard.toggle_platform("website")
        wizard.next()
        wizard.set_handle("website", "wizard.example")

        response = APIClient().post(
            reverse("business-intake"),
            wizard.to_intake_payload("12345678901"),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["business"]["links"][0]["url"], "wizard.example")


class PrintMigrationSQLCommandTests(TransactionTestCase):
    def test_prints_create_table(self):
        out = StringIO()
        call_command("print_migration_sql", stdout=out)
        output = out.getvalue()
        self.assertIn("CREATE TABLE", output)
        self.assertIn("businesses_business", output)
