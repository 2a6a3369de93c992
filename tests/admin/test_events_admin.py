from tests.admin.base import *  # noqa: F401,F403


class EventsAdminTests(OutreachApiBase):
    seed_defaults = False

    EVENT = {
        "title": "Adaptive Swim Night",
        "date": "2026-11-20",
        "time": "6:00 PM",
        "location": "Aquatic Center",
        "description": "Lane swim with coaches.",
        "category": "swimming",
        "registration_type": "internal",
        "max_registrations": 12,
    }

    def test_create_update_and_delete_event(self):
        headers = self._auth_headers()
        created = self.client.post("/api/admin/events", headers=headers, json=self.EVENT)
        self.assertEqual(created.status_code, 201)
        event_id = created.json()["id"]
        self.assertEqual(created.json()["max_registrations"], 12)

        patched = self.client.patch(f"/api/admin/events/{event_id}", headers=headers, json={"location": "Main Pool"})
        self.assertEqual(patched.status_code, 200)
        self.assertEqual(patched.json()["location"], "Main Pool")
        self.assertEqual(patched.json()["title"], "Adaptive Swim Night")
        self.assertEqual(patched.json()["registration_count"], 0)

        self._add_registration(event_id)
        deleted = self.client.delete(f"/api/admin/events/{event_id}", headers=headers)
        self.assertEqual(deleted.status_code, 200)
        with self.SessionLocal() as db:
            self.assertEqual(db.query(EventRegistration).count(), 0)
        self.assertEqual(self.client.get(f"/api/public/events/{event_id}").status_code, 404)

    def test_event_validation(self):
        headers = self._auth_headers()
        bad_category = dict(self.EVENT, category="chess")
        self.assertEqual(self.client.post("/api/admin/events", headers=headers, json=bad_category).status_code, 422)

        zero_capacity = dict(self.EVENT, max_registrations=0)
        self.assertEqual(self.client.post("/api/admin/events", headers=headers, json=zero_capacity).status_code, 422)

    def test_admin_list_includes_registration_counts(self):
        event_id = self._create_event()
        self._add_registration(event_id)
        self._add_registration(event_id, status="cancelled")
        rows = self.client.get("/api/admin/events", headers=self._auth_headers()).json()
        self.assertEqual(rows[0]["registration_count"], 1)

    def test_switching_to_external_stops_registrations(self):
        event_id = self._create_event()
        headers = self._auth_headers()
        self.client.patch(
            f"/api/admin/events/{event_id}",
            headers=headers,
            json={"registration_type": "external", "registration_url": "https://example.org/join"},
        )
        response = self.client.post(
            f"/api/public/events/{event_id}/registrations", json={"data": {"name": "Lee", "email": "lee@example.com"}}
        )
        self.assertEqual(response.status_code, 400)
        public = self.client.get(f"/api/public/events/{event_id}").json()
        self.assertEqual(public["registration_url"], "https://example.org/join")

    def test_missing_event_is_404(self):
        headers = self._auth_headers()
        self.assertEqual(self.client.patch("/api/admin/events/999", headers=headers, json={"title": "X"}).status_code, 404)
        self.assertEqual(self.client.delete("/api/admin/events/999", headers=headers).status_code, 404)
