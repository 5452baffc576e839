import json


MAX_EDGE_PX = 200
JPEG_QUALITY = 0.85

_WIDGET_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
  input { margin-top: 1rem; }
  input::file-selector-button {
    font-weight: bold;
    color: dodgerblue;
    padding: 0.5em;
    border: thin solid grey;
    border-radius: 3px;
  }
</style>
</head>
<body>
<div class="container">
  <input type="file" id="fileInput" accept="image/*" onchange="uploadFile()">
  <div id="result"></div>
  <div class="current-image">
    <button onclick="document.getElementById('fileInput').click()">
      <img id="currentImage" src="/image" alt="Current photo"
           onerror="this.style.display='none'; document.getElementById('noImageText').style.display='block';"
           onload="this.style.display='block'; document.getElementById('noImageText').style.display='none';">
      <div id="noImageText" class="no-image"></div>
    </button>
  </div>
</div>
<script>
  const UPLOAD_KEY = __UPLOAD_KEY__;
  const MAX_EDGE = __MAX_EDGE__;
  const QUALITY = __QUALITY__;

  function resizeImage(file) {
    return new Promise((resolve) => {
      const img = new Image();
      img.onload = () => {
        let w = img.width, h = img.height;
        if (w > h && w > MAX_EDGE) { h *= MAX_EDGE / w; w = MAX_EDGE; }
        else if (h > MAX_EDGE) { w *= MAX_EDGE / h; h = MAX_EDGE; }
        const canvas = document.createElement("canvas");
        canvas.width = w;
        canvas.height = h;
        canvas.getContext("2d").drawImage(img, 0, 0, w, h);
        canvas.toBlob(resolve, "image/jpeg", QUALITY);
      };
      img.src = URL.createObjectURL(file);
    });
  }

  async function uploadFile() {
    const input = document.getElementById("fileInput");
    const file = input.files[0];
    if (!file) return;
    const result = document.getElementById("result");
    result.innerHTML = "...";
    result.className = "result";
    try {
      const blob = await resizeImage(file);
      const form = new FormData();
      form.append("photo", blob, "image.jpg");
      form.append("key", UPLOAD_KEY);
      const response = await fetch("/upload", { method: "POST", body: form });
      const body = await response.json();
      if (body.success) {
        result.innerHTML = "200";
        result.className = "result success";
        document.getElementById("currentImage").src = "/image?" + Date.now();
        input.value = "";
        setTimeout(() => { result.innerHTML = ""; result.className = ""; }, 3000);
      } else {
        result.innerHTML = response.status;
        result.className = "result error";
      }
    } catch (e) {
      result.innerHTML = "error";
      result.className = "result error";
    }
  }
</script>
</body>
</html>
"""


def render_upload_widget(upload_key: str) -> str:
    """Render the upload page with upload_key embedded as a JS string literal."""
    key_literal = json.dumps(upload_key).replace("</", "<\\/")
    return (
        _WIDGET_TEMPLATE
        .replace("__UPLOAD_KEY__", key_literal)
        .replace("__MAX_EDGE__", str(MAX_EDGE_PX))
        .replace("__QUALITY__", str(JPEG_QUALITY))
    )
