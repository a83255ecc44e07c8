from capturebot.page import file_name_part, make_file_name, render_capture_page


def test_file_name():
    assert make_file_name("ballas", "families", 1700000000500) == "capture-1700000000500-ballas-vs-families.html"


def test_page_header_and_cards():
    html = render_capture_page("ballas", "families", "20:00", "AK")
    assert "<title>BALLAS vs FAMILIES • Capture</title>" in html
    assert '<div class="card"><strong>Attacker</strong><br>🟪 BALLAS</div>' in html
    assert '<div class="card"><strong>Defender</strong><br>🟢 FAMILIES</div>' in html
    assert '<div class="card"><strong>Start</strong><br>20:00</div>' in html
    assert '<div class="card"><strong>Weapon</strong><br>AK</div>' in html
    assert "Winner" not in html


def test_page_winner_card():
    html = render_capture_page("ballas", "families", "20:00", "AK", winner="families")
    assert '<div class="card"><strong>Winner</strong><br>🏆 🟢 FAMILIES</div>' in html


def test_unknown_gangs_use_fallback_emojis():
    html = render_capture_page("cartel", "triads", "20:00", "AK")
    assert "⚔️ CARTEL" in html
    assert "🛡️ TRIADS" in html


def test_tables_are_placeholders():
    html = render_capture_page("ballas", "families", "20:00", "AK")
    assert html.count("<th>Headshot %</th>") == 2
    assert html.count("Stats are visible on main panel (index.html)") == 2
    assert '<div class="pill pill-ballas">BALLAS</div>' in html
    assert '<div class="pill pill-families">FAMILIES</div>' in html


def test_values_are_escaped():
    html = render_capture_page("ballas", "families", "<b>20:00</b>", "AK & M4")
    assert "&lt;b&gt;20:00&lt;/b&gt;" in html
    assert "AK &amp; M4" in html
    assert "<b>20:00</b>" not in html


def test_subtitle():
    html = render_capture_page("ballas", "families", "20:00", "AK", subtitle="Created via capture control endpoint")
    assert '<p class="subtitle">Created via capture control endpoint</p>' in html


def test_file_name_parts_are_url_safe():
    assert file_name_part("Los Santos") == "los-santos"
    assert file_name_part("ballas/x") == "ballas-x"
    assert file_name_part("../../etc") == "etc"
    assert file_name_part("///") == "gang"
    assert make_file_name("los santos", "ballas/x", 5) == "capture-5-los-santos-vs-ballas-x.html"
