from babybook.db.errors import BackendError


PAYLOAD = "<script>alert(1)</script>"
ESCAPED = "&lt;script&gt;alert(1)&lt;/script&gt;"


def count_photos(html):
    return html.count('class="photo-frame ')


def test_home_for_anonymous_visitor(client, add_photos):
    add_photos(2, visibility="public")
    add_photos(3, visibility="private")

    response = client.get("/")
    assert response.status_code == 200
    assert count_photos(response.text) == 2
    assert "More photos are invite-only. Please login." in response.text
    assert "Journal is invite-only. Please login." in response.text
    assert 'id="journalList"' not in response.text
    assert "No public milestones yet." in response.text
    assert "No messages yet." in response.text


def test_signed_in_stranger_sees_contact_message(client, make_user, login, add_photos):
    add_photos(1, visibility="private")
    make_user("friend@example.com")
    login("friend@example.com")

    response = client.get("/")
    assert count_photos(response.text) == 0
    assert "You’ve not been added yet." in response.text
    assert "Please contact the parents." in response.text


def test_member_sees_private_content(client, backend, make_user, login, add_photos):
    add_photos(2, visibility="private")
    backend.table("journal_entries").insert({"title": "Bath time", "entry_date": "2024-05-01", "content_html": "<p>Splash</p>"}).execute()
    make_user("gran@example.com", "member")
    login("gran@example.com")

    response = client.get("/")
    assert count_photos(response.text) == 2
    assert 'id="galleryLocked"' not in response.text
    assert "Bath time" in response.text
    assert "Splash" in response.text


def test_user_content_is_escaped(client, backend, make_user, login):
    backend.table("site_settings").insert({"key": "hero_title", "value": PAYLOAD}).execute()
    backend.table("milestones").insert({"title": PAYLOAD, "happened_on": "2024-01-01", "tags": [PAYLOAD], "visibility": "public"}).execute()
    backend.table("photos").insert({"url": "/p.jpg", "caption": PAYLOAD, "visibility": "public"}).execute()
    backend.table("guestbook_entries").insert({"name": PAYLOAD, "relation": PAYLOAD, "message": PAYLOAD, "status": "approved"}).execute()
    backend.table("journal_entries").insert({"title": PAYLOAD, "entry_date": "2024-05-01", "content_html": "<p>&lt;script&gt;alert(1)&lt;/script&gt;</p>"}).execute()
    make_user("gran@example.com", "member")
    login("gran@example.com")

    response = client.get("/")
    assert PAYLOAD not in response.text
    assert ESCAPED in response.text


def test_load_more(client, add_photos):
    add_photos(25)

    first = client.get("/")
    assert count_photos(first.text) == 12
    assert 'href="/?gallery_page=1#gallery"' in first.text

    second = client.get("/?gallery_page=1")
    assert count_photos(second.text) == 24
    assert 'href="/?gallery_page=2#gallery"' in second.text

    last = client.get("/?gallery_page=2")
    assert count_photos(last.text) == 25
    assert 'id="galleryLoadMoreBtn"' not in last.text


def test_guestbook_submission(client, backend):
    response = client.post("/guestbook", data={"name": "Gran", "relation": "Grandmother", "message": "So proud"})
    assert response.status_code == 200
    assert "Thank you! Your message is submitted for approval." in response.text

    stored = backend.table("guestbook_entries").select().single().execute().data
    assert stored["status"] == "pending"
    assert "So proud" not in client.get("/").text


def test_guestbook_submission_missing_fields(client, backend):
    response = client.post("/guestbook", data={"name": "Gran", "relation": "", "message": "Hello there"})
    assert response.status_code == 400
    assert "Please fill in all fields." in response.text
    assert "Hello there" in response.text
    assert backend.table("guestbook_entries").select().execute().data == []


def test_lightbox_navigation(client, add_photos):
    add_photos(3)

    response = client.get("/lightbox/0")
    assert response.status_code == 200
    assert "Photo 2 • Jan 3, 2024" in response.text
    assert 'id="lightboxNext"' in response.text

    wrapped = client.get("/lightbox/0?key=ArrowLeft")
    assert "Photo 0 • Jan 1, 2024" in wrapped.text

    closed = client.get("/lightbox/1?key=Escape", follow_redirects=False)
    assert closed.status_code == 303
    assert closed.headers["location"] == "/?gallery_page=0#gallery"


def test_lightbox_single_photo_has_no_arrows(client, add_photos):
    add_photos(1)
    response = client.get("/lightbox/0")
    assert 'id="lightboxPrev"' not in response.text
    assert 'id="lightboxNext"' not in response.text


def test_lightbox_on_empty_gallery_goes_back(client):
    response = client.get("/lightbox/0", follow_redirects=False)
    assert response.status_code == 303


def test_admin_requires_login(client):
    response = client.get("/admin", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/login?next=%2Fadmin"


def test_admin_refuses_non_admin(client, make_user, login):
    make_user("gran@example.com", "member")
    login("gran@example.com")

    response = client.get("/admin")
    assert response.status_code == 403
    assert "Not authorized (you are logged in, but not an admin)." in response.text


def test_login_failure(client, make_user):
    make_user("mum@example.com", "admin")
    response = client.post("/login", data={"email": "mum@example.com", "password": "nope", "next": "/admin"})
    assert response.status_code == 400
    assert "Invalid login credentials" in response.text


def test_login_redirect_stays_on_site(client, make_user):
    make_user("mum@example.com", "admin")
    response = client.post(
        "/login",
        data={"email": "mum@example.com", "password": "correct-horse-battery", "next": "//evil.example.com"},
        follow_redirects=False,
    )
    assert response.headers["location"] == "/"


def test_logout(client, make_user, login):
    make_user("mum@example.com", "admin")
    login("mum@example.com")
    assert client.get("/admin").status_code == 200

    client.post("/logout", follow_redirects=False)
    assert client.get("/admin", follow_redirects=False).status_code == 303


def test_admin_console_flow(client, backend, make_user, login):
    make_user("mum@example.com", "admin")
    login("mum@example.com")

    response = client.post("/admin/milestones", data={
        "title": "First steps",
        "happened_on": "2024-09-01",
        "tags": "walking",
        "visibility": "public",
    })
    assert response.status_code == 200
    assert "✅ Milestone saved." in response.text
    assert "First steps" in client.get("/").text

    response = client.post("/admin/milestones", data={"title": "Undated", "happened_on": ""})
    assert response.status_code == 400
    assert "invalid input syntax for type date" in response.text

    response = client.post(
        "/admin/photos",
        data={"caption": "Park", "visibility": "public", "new_album": "Outings"},
        files={"file": ("park day.jpg", b"\xff\xd8jpeg", "image/jpeg")},
    )
    assert response.status_code == 200
    assert "✅ Uploaded and saved." in response.text

    photo = backend.table("photos").select().single().execute().data
    assert "_park_day.jpg" in photo["url"]
    served = client.get(photo["url"])
    assert served.status_code == 200
    assert served.content == b"\xff\xd8jpeg"


def test_admin_photo_without_file(client, make_user, login):
    make_user("mum@example.com", "admin")
    login("mum@example.com")
    response = client.post("/admin/photos", data={"caption": "Nothing"})
    assert response.status_code == 400
    assert "Please choose a file." in response.text


def test_moderation_publishes_entry(client, backend, make_user, login):
    make_user("mum@example.com", "admin")
    login("mum@example.com")
    entry = backend.table("guestbook_entries").insert({"name": "Gran", "relation": "Grandmother", "message": "Welcome!"}).execute().data[0]

    response = client.post(f"/admin/guestbook/{entry['id']}/status", data={"status": "approved"})
    assert "✅ Entry approved." in response.text
    assert "Welcome!" in client.get("/").text


def test_logout_clears_cookie_when_backend_fails(client, backend, make_user, login, monkeypatch):
    make_user("mum@example.com", "admin")
    login("mum@example.com")

    def broken_sign_out(token):
        raise BackendError("could not connect to server")

    monkeypatch.setattr(backend.auth, "sign_out", broken_sign_out)
    response = client.post("/logout", follow_redirects=False)
    assert response.status_code == 303
    assert 'access_token=""' in response.headers["set-cookie"]


def test_admin_adds_member_who_can_then_read_journal(client, backend, make_user, login):
    backend.table("journal_entries").insert({"title": "Bath time", "entry_date": "2024-05-01", "content_html": "Splash"}).execute()
    make_user("mum@example.com", "admin")
    login("mum@example.com")

    response = client.post("/admin/members", data={"email": "gran@example.com", "password": "knitting-2024"})
    assert response.status_code == 200
    assert "✅ Member added." in response.text
    assert "gran@example.com" in response.text

    client.post("/logout", follow_redirects=False)
    client.post("/login", data={"email": "gran@example.com", "password": "knitting-2024"}, follow_redirects=False)
    assert "Bath time" in client.get("/").text
