# capturebot/page.py

import html
import logging
import re
from pathlib import Path

# ---------- Gang palette ----------
GANG_STYLES = {
    "ballas":    {"emoji": "🟪", "color": 0x800080},
    "families":  {"emoji": "🟢", "color": 0x2ECC71},
    "marabunta": {"emoji": "🟦", "color": 0x3498DB},
    "bloods":    {"emoji": "🩸", "color": 0xE74C3C},
    "vagos":     {"emoji": "🟨", "color": 0xF1C40F},
}
ATTACKER_EMOJI = "⚔️"
DEFENDER_EMOJI = "🛡️"
DEFAULT_COLOR = 0x800080


def gang_emoji(gang, fallback=ATTACKER_EMOJI):
    return GANG_STYLES.get(gang, {}).get("emoji", fallback)


def gang_color(gang, fallback=DEFAULT_COLOR):
    return GANG_STYLES.get(gang, {}).get("color", fallback)


def capture_title(gang1, gang2):
    return f"{gang1.upper()} vs {gang2.upper()}"


FILE_NAME_UNSAFE = re.compile(r"[^a-z0-9_-]+")


def file_name_part(gang):
    """URL- and filesystem-safe form of a gang name."""
    return FILE_NAME_UNSAFE.sub("-", gang.lower()).strip("-") or "gang"


def make_file_name(gang1, gang2, created_ms):
    """File name for a capture page; fixed for the lifetime of one capture."""
    return f"capture-{int(created_ms)}-{file_name_part(gang1)}-vs-{file_name_part(gang2)}.html"


# ---------- Template ----------
CARD = '        <div class="card"><strong>{label}</strong><br>{value}</div>'

SIDE_TABLE = """      <div class="table_box">
        <div class="title-row">
          <div class="pill pill-{gang_class}">{gang}</div>
        </div>
        <table>
          <thead>
            <tr>
              <th>Nickname</th>
              <th>Hits</th>
              <th>Headshots</th>
              <th>Headshot %</th>
              <th>Damage</th>
            </tr>
          </thead>
          <tbody>
            <tr><td colspan="5">Stats are visible on main panel (index.html)</td></tr>
          </tbody>
        </table>
      </div>"""

PAGE = """<!DOCTYPE html>
<html lang="ka">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>{title} • Capture</title>
  <link rel="stylesheet" href="style.css" />
</head>
<body>
  <div class="wrapper">
    <header class="header">
      <img src="a.webp" alt="logo" class="logo">
      <div class="header-text">
        <h1 class="title">{title} • Capture</h1>
        <p class="subtitle">{subtitle}</p>
      </div>
    </header>

    <section class="info-section">
      <div class="info-cards">
{cards}
      </div>
    </section>

    <section class="tables">
{tables}
    </section>

    <footer class="footer">Capture Logs • NEXUS</footer>
  </div>
</body>
</html>
"""


def render_capture_page(gang1, gang2, start, weapon, winner=None, subtitle="Auto generated from server.log"):
    """Render the complete HTML document for one capture."""
    esc = html.escape
    g1 = gang1.upper()
    g2 = gang2.upper()
    title = esc(capture_title(gang1, gang2))

    cards = [
        ("Attacker", f"{gang_emoji(gang1, ATTACKER_EMOJI)} {esc(g1)}"),
        ("Defender", f"{gang_emoji(gang2, DEFENDER_EMOJI)} {esc(g2)}"),
        ("Start", esc(start)),
        ("Weapon", esc(weapon)),
    ]
    if winner:
        parts = ["🏆", gang_emoji(winner, ""), esc(winner.upper())]
        cards.append(("Winner", " ".join(p for p in parts if p)))

    tables = [
        SIDE_TABLE.format(gang_class=esc(gang1), gang=esc(g1)),
        SIDE_TABLE.format(gang_class=esc(gang2), gang=esc(g2)),
    ]

    return PAGE.format(
        title=title,
        subtitle=esc(subtitle),
        cards="\n".join(CARD.format(label=label, value=value) for label, value in cards),
        tables="\n\n".join(tables),
    )


def write_capture_page(web_dir, file_name, document):
    """Write (or overwrite) a capture page under the static directory."""
    web_dir = Path(web_dir)
    web_dir.mkdir(parents=True, exist_ok=True)
    file_path = web_dir / file_name
    with open(file_path, "w", encoding="utf-8") as f:
        f.write(document)
    logging.info(f"Wrote capture page: {file_path}")
    return file_path
