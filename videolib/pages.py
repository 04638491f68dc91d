"""HTML for the browser UI. Plain templates + vanilla JS talking to the /api routes."""

STYLE = r"""
  <style>
    :root {
      --bg: #0b0b0c;
      --panel: rgba(20,20,22,0.85);
      --card: #17171a;
      --text: #f4f4f6;
      --muted: rgba(244,244,246,0.65);
      --line: rgba(244,244,246,0.12);
      --accent: #30b260;
      --danger: #dc1e1e;
      --shadow: 0 10px 40px rgba(0,0,0,0.45);
    }
    * { box-sizing: border-box; }
    body {
      margin: 0;
      font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial;
      background: var(--bg);
      color: var(--text);
    }
    a { color: inherit; text-decoration: none; }
    .nav {
      position: sticky; top: 0; z-index: 50;
      display: flex; gap: 6px; align-items: center;
      padding: 10px 16px;
      background: var(--panel);
      border-bottom: 1px solid var(--line);
      backdrop-filter: blur(10px);
    }
    .nav .brand { font-weight: 700; margin-right: 16px; }
    .nav a.link { padding: 8px 12px; border-radius: 12px; color: var(--muted); font-size: 14px; }
    .nav a.link:hover { background: rgba(255,255,255,0.06); color: var(--text); }
    .nav a.link.active { background: rgba(255,255,255,0.10); color: var(--text); }
    .wrap { max-width: 1200px; margin: 0 auto; padding: 20px 16px 60px; }
    input[type="search"], input[type="text"] {
      width: 100%;
      border: 1px solid var(--line);
      background: rgba(15,15,18,0.65);
      color: var(--text);
      padding: 12px;
      border-radius: 14px;
      outline: none;
      font-size: 15px;
    }
    textarea {
      width: 100%; min-height: 70px;
      border: 1px solid var(--line); border-radius: 10px;
      background: rgba(15,15,18,0.65); color: var(--text);
      font-family: ui-monospace, monospace; font-size: 12px; padding: 8px;
    }
    .btn {
      display: inline-block;
      border: 1px solid var(--line);
      background: rgba(15,15,18,0.55);
      color: var(--text);
      padding: 9px 12px;
      border-radius: 12px;
      font-size: 13px;
      cursor: pointer;
      user-select: none;
    }
    .btn:hover { background: rgba(255,255,255,0.08); }
    .btn.primary { background: var(--accent); color: #0b0b0c; font-weight: 600; }
    .btn.danger { background: rgba(220,30,30,0.9); color: white; }
    .row { display: flex; gap: 10px; align-items: center; }
    .muted { color: var(--muted); font-size: 13px; }
    .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(230px, 1fr)); gap: 14px; margin-top: 14px; }
    .card {
      background: var(--card);
      border: 1px solid var(--line);
      border-radius: 14px;
      overflow: hidden;
      cursor: pointer;
    }
    .card:hover { border-color: rgba(244,244,246,0.3); }
    .thumb { aspect-ratio: 16/9; background: #000; display: grid; place-items: center; position: relative; }
    .thumb img { width: 100%; height: 100%; object-fit: cover; }
    .thumb .fmt { position: absolute; right: 8px; bottom: 8px; font-size: 11px; padding: 2px 6px; border-radius: 6px; background: rgba(0,0,0,0.7); }
    .bar { height: 3px; background: var(--accent); }
    .cardBody { padding: 10px 12px; }
    .cardTitle { font-size: 14px; white-space: nowrap; overflow: hidden; text-overflow: ellipsis; }
    .folderCard .cardBody { padding: 16px 12px; }
    .crumbs { display: flex; gap: 6px; flex-wrap: wrap; margin: 14px 0 0; font-size: 13px; }
    .crumbs span { cursor: pointer; color: var(--muted); }
    .crumbs span:hover { color: var(--text); }
    .dialog {
      position: fixed; inset: 0; z-index: 80;
      background: rgba(0,0,0,0.6);
      display: none; place-items: center;
    }
    .dialog.show { display: grid; }
    .dialogBox {
      width: min(760px, 94vw); max-height: 86vh; overflow-y: auto;
      background: var(--panel); border: 1px solid var(--line);
      border-radius: 16px; padding: 18px; box-shadow: var(--shadow);
    }
    .toast {
      position: fixed; left: 50%; transform: translateX(-50%); bottom: 18px;
      padding: 10px 12px; border: 1px solid var(--line);
      background: rgba(15,15,18,0.9); color: var(--text);
      border-radius: 14px; display: none; z-index: 90; font-size: 13px;
    }
    .toast.show { display: block; }
    video { width: 100%; max-height: 72vh; background: #000; border-radius: 12px; }
  </style>
"""

SCRIPT_HELPERS = r"""
<script>
const toastEl = document.getElementById("toast");

function toast(msg) {
  toastEl.textContent = msg;
  toastEl.classList.add("show");
  setTimeout(() => toastEl.classList.remove("show"), 1800);
}

async function fetchJSON(url, opts) {
  const res = await fetch(url, opts);
  const data = await res.json().catch(() => ({}));
  if (!res.ok) throw new Error(data.error || ("HTTP " + res.status));
  return data;
}

function formatSize(bytes) {
  if (bytes < 1024 * 1024) return (bytes / 1024).toFixed(1) + " KB";
  if (bytes < 1024 * 1024 * 1024) return (bytes / (1024 * 1024)).toFixed(1) + " MB";
  return (bytes / (1024 * 1024 * 1024)).toFixed(2) + " GB";
}

async function copyText(text, msg) {
  try {
    await navigator.clipboard.writeText(text);
    toast(msg || "Copied to clipboard!");
  } catch (e) {
    console.error(e);
    toast("Failed to copy");
  }
}

function el(tag, cls, text) {
  const e = document.createElement(tag);
  if (cls) e.className = cls;
  if (text !== undefined) e.textContent = text;
  return e;
}

function subtitleSrc(videoId, sub) {
  const base = "/api/subtitles/" + videoId + "/" + encodeURIComponent(sub.filename);
  return sub.filename.toLowerCase().endsWith(".srt") ? base + "?format=vtt" : base;
}

function addTracks(videoEl, video) {
  (video.subtitles || []).forEach((sub, i) => {
    const t = document.createElement("track");
    t.kind = "subtitles";
    t.label = sub.language.toUpperCase();
    t.srclang = sub.language;
    t.src = subtitleSrc(video.id, sub);
    if (i === 0) t.default = true;
    videoEl.appendChild(t);
  });
}
</script>
"""


def _page(title: str, body: str, script: str) -> str:
    return (
        '<!doctype html>\n<html lang="en">\n<head>\n'
        '  <meta charset="utf-8" />\n'
        '  <meta name="viewport" content="width=device-width,initial-scale=1" />\n'
        f"  <title>{title}</title>\n"
        + STYLE
        + "</head>\n<body>\n"
        + NAV
        + body
        + '\n<div id="toast" class="toast"></div>\n'
        + SCRIPT_HELPERS
        + script
        + "\n</body>\n</html>\n"
    )


NAV = r"""
<div class="nav">
  <a class="brand" href="/">Video Library</a>
  <a class="link {{ 'active' if page == 'library' }}" href="/">Library</a>
  <a class="link {{ 'active' if page == 'embed-codes' }}" href="/embed-codes">Embed codes</a>
  <a class="link {{ 'active' if page == 'stats' }}" href="/stats">Progress</a>
  <a class="link {{ 'active' if page == 'settings' }}" href="/settings">Folders</a>
</div>
"""

LIBRARY_HTML = _page("Video Library", r"""
<div class="wrap">
  <div class="row">
    <input id="q" type="search" placeholder="Search videos by title or path…" autocomplete="off" />
    <div id="folderEmbed" class="btn" style="white-space: nowrap; display: none;">Folder embed codes</div>
  </div>
  <div id="crumbs" class="crumbs"></div>
  <div id="hint" class="muted" style="margin-top: 8px;"></div>
  <div id="grid" class="grid"></div>
</div>

<div id="embedDialog" class="dialog">
  <div class="dialogBox">
    <div class="row" style="justify-content: space-between;">
      <h3 style="margin: 0;">Embed codes for this folder</h3>
      <div class="row">
        <div id="copyAll" class="btn primary">Copy all</div>
        <a id="downloadAll" class="btn">Download</a>
        <div id="closeEmbed" class="btn">Close</div>
      </div>
    </div>
    <div id="embedList"></div>
  </div>
</div>
""", r"""
<script>
const gridEl = document.getElementById("grid");
const qEl = document.getElementById("q");
const hintEl = document.getElementById("hint");
const crumbsEl = document.getElementById("crumbs");
const folderEmbedBtn = document.getElementById("folderEmbed");
const embedDialog = document.getElementById("embedDialog");

let currentPath = new URLSearchParams(location.search).get("path");
let progress = {};
let roots = [];

function videoCard(v) {
  const card = el("div", "card");
  const thumb = el("div", "thumb");
  const img = document.createElement("img");
  img.loading = "lazy";
  img.src = "/api/thumbnail/" + v.id;
  img.alt = v.title;
  img.onerror = () => img.remove();
  thumb.appendChild(img);
  thumb.appendChild(el("span", "fmt", v.format.toUpperCase()));
  card.appendChild(thumb);

  const p = progress[v.id];
  if (p) {
    const bar = el("div", "bar");
    bar.style.width = (p.completed ? 100 : p.percentage) + "%";
    card.appendChild(bar);
  }

  const body = el("div", "cardBody");
  body.appendChild(el("div", "cardTitle", v.title));
  const meta = formatSize(v.size) + (v.subtitles.length ? " • " + v.subtitles.length + " subtitle(s)" : "");
  body.appendChild(el("div", "muted", meta));
  card.appendChild(body);
  card.addEventListener("click", () => { location.href = "/watch/" + v.id; });
  return card;
}

function folderCard(f) {
  const card = el("div", "card folderCard");
  const body = el("div", "cardBody");
  body.appendChild(el("div", "cardTitle", "📁 " + f.name));
  body.appendChild(el("div", "muted", new Date(f.modified).toLocaleDateString()));
  card.appendChild(body);
  card.addEventListener("click", () => navigate(f.path));
  return card;
}

function renderCrumbs() {
  crumbsEl.innerHTML = "";
  const home = el("span", null, "Library");
  home.addEventListener("click", () => navigate(null));
  crumbsEl.appendChild(home);
  if (!currentPath) return;

  const root = roots.find(r => currentPath === r.path || currentPath.startsWith(r.path + "/"));
  if (!root) return;
  let acc = root.path;
  const parts = [{ name: root.name, path: root.path }];
  currentPath.slice(root.path.length).split("/").filter(Boolean).forEach(part => {
    acc = acc + "/" + part;
    parts.push({ name: part, path: acc });
  });
  parts.forEach(p => {
    crumbsEl.appendChild(el("span", null, "›"));
    const s = el("span", null, p.name);
    s.addEventListener("click", () => navigate(p.path));
    crumbsEl.appendChild(s);
  });
}

async function navigate(path) {
  currentPath = path;
  const url = path ? "/?path=" + encodeURIComponent(path) : "/";
  history.pushState(null, "", url);
  await load();
}

async function load() {
  gridEl.innerHTML = "";
  const q = qEl.value.trim();
  try {
    if (q) {
      const videos = await fetchJSON("/api/videos?q=" + encodeURIComponent(q));
      hintEl.textContent = videos.length + " match(es)";
      crumbsEl.innerHTML = "";
      folderEmbedBtn.style.display = "none";
      videos.forEach(v => gridEl.appendChild(videoCard(v)));
      return;
    }
    const data = await fetchJSON("/api/browse" + (currentPath ? "?path=" + encodeURIComponent(currentPath) : ""));
    if (!currentPath) roots = data.folders;
    renderCrumbs();
    folderEmbedBtn.style.display = data.videos.length ? "inline-block" : "none";
    if (!currentPath && !data.folders.length) {
      hintEl.innerHTML = 'No folders configured yet. Add one on the <a href="/settings"><u>Folders</u></a> page.';
      return;
    }
    hintEl.textContent = data.folders.length + " folder(s) • " + data.videos.length + " video(s)";
    data.folders.forEach(f => gridEl.appendChild(folderCard(f)));
    data.videos.forEach(v => gridEl.appendChild(videoCard(v)));
  } catch (e) {
    console.error(e);
    hintEl.textContent = "Failed to load: " + e.message;
  }
}

let searchTimer = null;
qEl.addEventListener("input", () => {
  clearTimeout(searchTimer);
  searchTimer = setTimeout(load, 200);
});

window.addEventListener("popstate", () => {
  currentPath = new URLSearchParams(location.search).get("path");
  load();
});

folderEmbedBtn.addEventListener("click", async () => {
  const query = "folder=" + encodeURIComponent(currentPath || "");
  const codes = await fetchJSON("/api/embed-codes?" + query);
  const list = document.getElementById("embedList");
  list.innerHTML = "";
  codes.forEach(c => {
    const box = el("div", null);
    box.style.marginTop = "14px";
    const head = el("div", "row");
    head.style.justifyContent = "space-between";
    head.appendChild(el("div", "cardTitle", c.title));
    const btn = el("div", "btn", "Copy");
    btn.addEventListener("click", () => copyText(c.code, "Embed code copied!"));
    head.appendChild(btn);
    box.appendChild(head);
    const ta = el("textarea");
    ta.readOnly = true;
    ta.value = c.code;
    box.appendChild(ta);
    list.appendChild(box);
  });
  document.getElementById("copyAll").onclick = () => copyText(
    codes.map(c => "<!-- " + c.title + " -->\n" + c.code + "\n").join("\n"), "All embed codes copied!");
  document.getElementById("downloadAll").href = "/api/embed-codes?download=1&" + query;
  embedDialog.classList.add("show");
});

document.getElementById("closeEmbed").addEventListener("click", () => embedDialog.classList.remove("show"));

(async function init() {
  try { progress = await fetchJSON("/api/progress"); } catch (e) { progress = {}; }
  if (currentPath) {
    try { roots = (await fetchJSON("/api/browse")).folders; } catch (e) { roots = []; }
  }
  await load();
})();
</script>
""")

WATCH_HTML = _page("Watch", r"""
<div class="wrap">
  <div id="missing" class="muted" style="display: none;">Video not found. <a href="/"><u>Back to library</u></a></div>
  <div id="main" style="display: none;">
    <video id="player" controls playsinline preload="metadata" crossorigin="anonymous"></video>
    <div class="row" style="justify-content: space-between; margin-top: 12px;">
      <div>
        <h2 id="title" style="margin: 0 0 4px;"></h2>
        <div id="meta" class="muted"></div>
      </div>
      <div class="row">
        <a id="folderLink" class="btn">Folder</a>
        <div id="share" class="btn primary">Share / Embed</div>
      </div>
    </div>
    <h3 style="margin-top: 28px;">Up next</h3>
    <div id="next" class="grid"></div>
  </div>
</div>

<div id="embedDialog" class="dialog">
  <div class="dialogBox">
    <div class="row" style="justify-content: space-between;">
      <h3 style="margin: 0;">Embed video</h3>
      <div id="closeEmbed" class="btn">Close</div>
    </div>
    <p class="muted">Iframe embed code</p>
    <textarea id="iframeCode" readonly></textarea>
    <div id="copyIframe" class="btn" style="margin-top: 6px;">Copy embed code</div>
    <p class="muted">Direct link</p>
    <input id="directUrl" type="text" readonly />
    <div id="copyDirect" class="btn" style="margin-top: 6px;">Copy link</div>
  </div>
</div>
""", r"""
<script>
const videoId = {{ video_id|tojson }};
const player = document.getElementById("player");
const embedDialog = document.getElementById("embedDialog");
let lastSent = 0;
let completedSent = false;

async function sendProgress(completed) {
  if (!player.duration) return;
  const percentage = Math.min(100, (player.currentTime / player.duration) * 100);
  try {
    const res = await fetchJSON("/api/progress/" + videoId, {
      method: "POST",
      headers: { "Content-Type": "application/json" },
      body: JSON.stringify({ percentage, completed: !!completed }),
    });
    (res.unlocked || []).forEach(a => toast("🏆 Achievement unlocked: " + a.name + " (+" + a.points + ")"));
    if (res.progress && res.progress.completed) completedSent = true;
  } catch (e) {
    console.error(e);
  }
}

player.addEventListener("timeupdate", () => {
  const now = Date.now();
  if (now - lastSent > 10000) {
    lastSent = now;
    sendProgress(false);
  }
});
player.addEventListener("pause", () => sendProgress(false));
player.addEventListener("ended", () => { if (!completedSent) sendProgress(true); });

function nextCard(v) {
  const card = el("div", "card");
  const body = el("div", "cardBody");
  body.appendChild(el("div", "cardTitle", "▶ " + v.title));
  body.appendChild(el("div", "muted", formatSize(v.size)));
  card.appendChild(body);
  card.addEventListener("click", () => { location.href = "/watch/" + v.id; });
  return card;
}

document.getElementById("share").addEventListener("click", async () => {
  const data = await fetchJSON("/api/videos/" + videoId + "/embed");
  document.getElementById("iframeCode").value = data.iframe;
  document.getElementById("directUrl").value = data.watchUrl;
  document.getElementById("copyIframe").onclick = () => copyText(data.iframe);
  document.getElementById("copyDirect").onclick = () => copyText(data.watchUrl);
  embedDialog.classList.add("show");
});
document.getElementById("closeEmbed").addEventListener("click", () => embedDialog.classList.remove("show"));

(async function init() {
  let video;
  try {
    video = await fetchJSON("/api/videos/" + videoId);
  } catch (e) {
    document.getElementById("missing").style.display = "block";
    return;
  }
  document.title = video.title;
  document.getElementById("main").style.display = "block";
  document.getElementById("title").textContent = video.title;
  document.getElementById("meta").textContent =
    formatSize(video.size) + " • " + video.format.toUpperCase() + " • " + new Date(video.modified).toLocaleString();
  const dir = video.path.slice(0, video.path.length - video.filename.length - 1);
  document.getElementById("folderLink").href = "/?path=" + encodeURIComponent(dir);

  player.src = "/api/stream/" + video.id;
  player.poster = "/api/thumbnail/" + video.id;
  addTracks(player, video);

  try {
    const p = await fetchJSON("/api/progress/" + video.id);
    if (p.percentage && !p.completed) {
      player.addEventListener("loadedmetadata", () => {
        player.currentTime = player.duration * p.percentage / 100;
      }, { once: true });
    }
    completedSent = !!p.completed;
  } catch (e) {
    console.error(e);
  }

  const next = await fetchJSON("/api/videos/" + video.id + "/next?limit=5");
  const nextEl = document.getElementById("next");
  if (!next.length) nextEl.appendChild(el("div", "muted", "Nothing else in this folder."));
  next.forEach(v => nextEl.appendChild(nextCard(v)));
})();
</script>
""")

EMBED_HTML = r"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width,initial-scale=1" />
  <title>Video</title>
  <style>
    html, body { margin: 0; height: 100%; background: #000; color: #fff; font-family: system-ui, sans-serif; }
    video { width: 100%; height: 100vh; object-fit: contain; background: #000; }
    .msg { height: 100vh; display: grid; place-items: center; }
  </style>
</head>
<body>
  <video id="player" controls playsinline preload="metadata" crossorigin="anonymous"></video>
<script>
const videoId = {{ video_id|tojson }};
const player = document.getElementById("player");

(async function init() {
  const res = await fetch("/api/videos/" + videoId);
  if (!res.ok) {
    document.body.innerHTML = '<div class="msg">Video not found</div>';
    return;
  }
  const video = await res.json();
  document.title = video.title;
  player.src = "/api/stream/" + video.id;
  (video.subtitles || []).forEach((sub, i) => {
    const t = document.createElement("track");
    t.kind = "subtitles";
    t.label = sub.language.toUpperCase();
    t.srclang = sub.language;
    const base = "/api/subtitles/" + video.id + "/" + encodeURIComponent(sub.filename);
    t.src = sub.filename.toLowerCase().endsWith(".srt") ? base + "?format=vtt" : base;
    if (i === 0) t.default = true;
    player.appendChild(t);
  });
})();
</script>
</body>
</html>
"""

SETTINGS_HTML = _page("Folders", r"""
<div class="wrap">
  <h2>Video folders</h2>
  <p class="muted">Absolute paths on this machine. Removing a folder only hides it from the library; files are not touched.</p>
  <div class="row">
    <input id="folderInput" type="text" placeholder="/home/me/Videos" />
    <div id="addFolder" class="btn primary">Add</div>
  </div>
  <div id="folders" style="margin-top: 16px;"></div>
  <p id="health" class="muted" style="margin-top: 24px;"></p>
</div>
""", r"""
<script>
const foldersEl = document.getElementById("folders");
const inputEl = document.getElementById("folderInput");

function render(folders) {
  foldersEl.innerHTML = "";
  if (!folders.length) foldersEl.appendChild(el("div", "muted", "No folders configured."));
  folders.forEach(f => {
    const row = el("div", "row card");
    row.style.cursor = "default";
    row.style.padding = "10px 12px";
    row.style.marginBottom = "8px";
    row.style.justifyContent = "space-between";
    row.appendChild(el("div", null, f));
    const btn = el("div", "btn danger", "Remove");
    btn.addEventListener("click", () => change("DELETE", f));
    row.appendChild(btn);
    foldersEl.appendChild(row);
  });
}

async function change(method, folder) {
  try {
    const data = await fetchJSON("/api/config/folders", {
      method,
      headers: { "Content-Type": "application/json" },
      body: JSON.stringify({ folder }),
    });
    render(data.folders);
    toast(method === "POST" ? "Folder added" : "Folder removed");
  } catch (e) {
    toast(e.message);
  }
}

document.getElementById("addFolder").addEventListener("click", () => {
  const folder = inputEl.value.trim();
  if (!folder) return;
  inputEl.value = "";
  change("POST", folder);
});
inputEl.addEventListener("keydown", (e) => {
  if (e.key === "Enter") document.getElementById("addFolder").click();
});

(async function init() {
  render((await fetchJSON("/api/config/folders")).folders);
  try {
    const h = await fetchJSON("/api/health");
    document.getElementById("health").textContent =
      "Server " + h.status + " • " + h.folders + " folder(s) • " + new Date(h.timestamp).toLocaleTimeString();
  } catch (e) {
    document.getElementById("health").textContent = "Server unreachable";
  }
})();
</script>
""")

EMBED_CODES_HTML = _page("Embed codes", r"""
<div class="wrap">
  <div class="row" style="justify-content: space-between;">
    <h2>Embed codes</h2>
    <div class="row">
      <div id="copyAll" class="btn primary">Copy all</div>
      <a id="download" class="btn" href="/api/embed-codes?download=1">Download</a>
    </div>
  </div>
  <input id="q" type="search" placeholder="Filter by title…" autocomplete="off" />
  <div id="hint" class="muted" style="margin-top: 8px;"></div>
  <div id="codes"></div>
</div>
""", r"""
<script>
const qEl = document.getElementById("q");
const codesEl = document.getElementById("codes");
let codes = [];

async function load() {
  const q = qEl.value.trim();
  codes = await fetchJSON("/api/embed-codes?q=" + encodeURIComponent(q));
  document.getElementById("download").href = "/api/embed-codes?download=1&q=" + encodeURIComponent(q);
  document.getElementById("hint").textContent = codes.length + " video(s)";
  codesEl.innerHTML = "";
  codes.forEach(c => {
    const box = el("div", "card");
    box.style.cursor = "default";
    box.style.padding = "12px";
    box.style.marginTop = "12px";
    const head = el("div", "row");
    head.style.justifyContent = "space-between";
    head.appendChild(el("div", "cardTitle", c.title));
    const btn = el("div", "btn", "Copy");
    btn.addEventListener("click", () => copyText(c.code, "Embed code copied!"));
    head.appendChild(btn);
    box.appendChild(head);
    const ta = el("textarea");
    ta.readOnly = true;
    ta.value = c.code;
    box.appendChild(ta);
    codesEl.appendChild(box);
  });
}

document.getElementById("copyAll").addEventListener("click", () => copyText(
  codes.map(c => "<!-- " + c.title + " -->\n" + c.code + "\n").join("\n"), "All embed codes copied!"));

let timer = null;
qEl.addEventListener("input", () => {
  clearTimeout(timer);
  timer = setTimeout(load, 200);
});

load().catch(e => toast(e.message));
</script>
""")

STATS_HTML = _page("Progress", r"""
<div class="wrap">
  <h2>Your progress</h2>
  <div id="stats" class="grid"></div>
  <h3 style="margin-top: 28px;">Achievements</h3>
  <div id="achievements" class="grid"></div>
</div>
""", r"""
<script>
function statCard(label, value) {
  const card = el("div", "card");
  card.style.cursor = "default";
  const body = el("div", "cardBody");
  body.appendChild(el("div", "muted", label));
  const v = el("div", null, String(value));
  v.style.fontSize = "26px";
  v.style.fontWeight = "700";
  body.appendChild(v);
  card.appendChild(body);
  return card;
}

(async function init() {
  const s = await fetchJSON("/api/stats");
  const statsEl = document.getElementById("stats");
  [
    ["Level", s.level],
    ["Points", s.totalPoints],
    ["Videos finished", s.videosCompleted],
    ["Videos started", s.videosStarted],
    ["Current streak (days)", s.currentStreak],
    ["Longest streak (days)", s.longestStreak],
    ["Achievements", s.achievementsUnlocked + " / " + s.achievementsTotal],
  ].forEach(([label, value]) => statsEl.appendChild(statCard(label, value)));

  const achievements = await fetchJSON("/api/achievements");
  const achEl = document.getElementById("achievements");
  achievements.forEach(a => {
    const card = el("div", "card");
    card.style.cursor = "default";
    if (!a.unlocked) card.style.opacity = "0.5";
    const body = el("div", "cardBody");
    body.appendChild(el("div", "cardTitle", (a.unlocked ? "🏆 " : "🔒 ") + a.name));
    body.appendChild(el("div", "muted", a.description + " • +" + a.points + " pts"));
    body.appendChild(el("div", "muted", a.unlocked
      ? "Unlocked " + new Date(a.unlockedAt).toLocaleDateString()
      : Math.min(a.current, a.threshold) + " / " + a.threshold));
    card.appendChild(body);
    achEl.appendChild(card);
  });
})();
</script>
""")
