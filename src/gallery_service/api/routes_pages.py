from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ..models import Upload
from ..queries import ServerCaller
from .deps import get_caller

router = APIRouter(tags=["pages"])

_PAGE = """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Image uploads</title>
<style>
  body {{ font-family: sans-serif; max-width: 960px; margin: 2rem auto; }}
  #gallery {{ display: grid; grid-template-columns: repeat(auto-fill, minmax(180px, 1fr)); gap: 1rem; list-style: none; padding: 0; }}
  #gallery img {{ width: 100%; height: 160px; object-fit: cover; }}
  #status.error {{ color: #b00020; }}
</style>
</head>
<body>
<h1>Upload an image</h1>
<form id="upload-form" action="/api/upload" method="post" enctype="multipart/form-data">
  <input type="file" name="file" accept="image/*">
  <button type="submit">Upload</button>
</form>
<p id="status"></p>
<h2>Recent uploads ({count})</h2>
<ul id="gallery">
{items}
</ul>
<script>
const form = document.getElementById("upload-form");
const statusEl = document.getElementById("status");
const gallery = document.getElementById("gallery");

function render(uploads) {{
  gallery.replaceChildren(...uploads.map((u) => {{
    const li = document.createElement("li");
    const img = document.createElement("img");
    img.src = u.url;
    img.alt = u.original_name;
    const caption = document.createElement("div");
    caption.textContent = u.original_name;
    li.append(img, caption);
    return li;
  }}));
}}

form.addEventListener("submit", async (event) => {{
  event.preventDefault();
  statusEl.className = "";
  statusEl.textContent = "Uploading...";
  const resp = await fetch("/api/upload", {{ method: "POST", body: new FormData(form) }});
  if (!resp.ok) {{
    const body = await resp.json().catch(() => ({{}}));
    statusEl.className = "error";
    statusEl.textContent = body.detail || "Upload failed";
    return;
  }}
  statusEl.textContent = "Uploaded";
  form.reset();
  const list = await fetch("/api/uploads").then((r) => r.json());
  render(list.uploads);
}});
</script>
</body>
</html>
"""


def _item(upload: Upload) -> str:
    name = escape(upload.original_name)
    return f'<li><img src="{escape(upload.url)}" alt="{name}"><div>{name}</div></li>'


@router.get("/", response_class=HTMLResponse)
def index(caller: ServerCaller = Depends(get_caller)):
    uploads = caller.upload_all()
    return HTMLResponse(_PAGE.format(count=len(uploads), items="\n".join(_item(u) for u in uploads)))
