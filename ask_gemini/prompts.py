DEFAULT_PROMPT = "Explain how AI works"

ERROR_MESSAGE = "Failed to get response from AI"

PAGE_TITLE = "Ask Gemini AI"

INPUT_PLACEHOLDER = "Type your question here..."

PAGE_STYLE = """
* { box-sizing: border-box; }
body {
  margin: 0;
  display: flex;
  align-items: flex-end;
  justify-content: center;
  height: 100vh;
  background: #000;
  padding-bottom: 15vh;
  position: relative;
  overflow: hidden;
  font-family: system-ui, sans-serif;
}
.glow {
  position: absolute;
  top: 20%;
  right: 15%;
  width: 200px;
  height: 200px;
  border-radius: 50%;
  background: radial-gradient(circle, rgba(80,80,80,0.3) 0%, rgba(0,0,0,0) 70%);
  animation: float 12s infinite ease-in-out;
}
.card {
  width: 100%;
  max-width: 500px;
  padding: 40px;
  background: rgba(20, 20, 20, 0.9);
  border-radius: 16px;
  box-shadow: 0 10px 30px rgba(0, 0, 0, 0.5);
  border: 1px solid rgba(255, 255, 255, 0.1);
}
form {
  display: flex;
  flex-direction: column;
  align-items: center;
  gap: 25px;
  width: 100%;
}
h1 {
  color: #fff;
  font-size: 1.8rem;
  font-weight: 400;
  margin-bottom: 5px;
  letter-spacing: -0.5px;
  text-align: center;
}
.field { position: relative; width: 100%; }
.field input {
  width: 100%;
  padding: 18px 25px;
  font-size: 1rem;
  border-radius: 8px;
  border: 1px solid rgba(255, 255, 255, 0.1);
  outline: none;
  background: rgba(30, 30, 30, 0.8);
  transition: all 0.3s cubic-bezier(0.25, 0.8, 0.25, 1);
  color: #fff;
}
.field .underline {
  position: absolute;
  bottom: 0;
  left: 0;
  width: 0%;
  height: 1px;
  background: linear-gradient(to right, transparent, #aaa, transparent);
  transition: all 0.4s cubic-bezier(0.25, 0.8, 0.25, 1);
}
.field.focused input { box-shadow: 0 0 0 2px rgba(150, 150, 150, 0.3); }
.field.focused .underline { width: 100%; }
#status { display: flex; flex-direction: column; align-items: center; width: 100%; }
button {
  padding: 16px 45px;
  font-size: 1rem;
  font-weight: 500;
  color: #fff;
  background: linear-gradient(to right, #555, #333);
  border: none;
  border-radius: 8px;
  cursor: pointer;
  box-shadow: 0 4px 15px rgba(0, 0, 0, 0.3);
  transition: all 0.3s ease;
  letter-spacing: 0.5px;
  width: 100%;
  max-width: 300px;
}
button:hover:enabled {
  transform: translateY(-2px);
  box-shadow: 0 7px 20px rgba(0, 0, 0, 0.4);
  background: linear-gradient(to right, #666, #444);
}
button.loading { background: #444; cursor: not-allowed; }
button:disabled { cursor: not-allowed; }
.error {
  color: #ff6b6b;
  text-align: center;
  animation: fadeIn 0.5s ease;
  margin-top: 10px;
}
.response {
  color: #aaa;
  text-align: center;
  animation: fadeIn 0.5s ease;
  margin-top: 20px;
  padding: 15px;
  background: rgba(30, 30, 30, 0.6);
  border-radius: 8px;
  border-left: 3px solid #555;
  white-space: pre-wrap;
}
@keyframes float {
  0%, 100% { transform: translateY(0) rotate(0deg); }
  50% { transform: translateY(-15px) rotate(2deg); }
}
@keyframes fadeIn {
  from { opacity: 0; transform: translateY(10px); }
  to { opacity: 1; transform: translateY(0); }
}
"""

# Forwards input, focus and submit events to the JSON API and re-renders the
# status region from the returned state until the session is idle again.
PAGE_SCRIPT = """
const form = document.getElementById("prompt-form");
const input = document.getElementById("prompt-input");
const field = document.getElementById("prompt-field");
const status = document.getElementById("status");
let pending = null;

async function post(path, body) {
  const resp = await fetch(path, {
    method: "POST",
    headers: { "Content-Type": "application/json" },
    body: JSON.stringify(body),
  });
  return resp.json();
}

function apply(snapshot) {
  if (snapshot.html !== undefined) status.innerHTML = snapshot.html;
  if (snapshot.state) field.classList.toggle("focused", snapshot.state.is_focused);
  clearTimeout(pending);
  pending = null;
  if (snapshot.phase && snapshot.phase !== "idle") pending = setTimeout(refresh, 500);
}

async function refresh() {
  const resp = await fetch("/api/state");
  apply(await resp.json());
}

input.addEventListener("input", () => post("/api/input", { text: input.value }));
input.addEventListener("focus", async () => apply(await post("/api/focus", { focused: true })));
input.addEventListener("blur", async () => apply(await post("/api/focus", { focused: false })));
form.addEventListener("submit", async (e) => {
  e.preventDefault();
  apply(await post("/api/submit", { text: input.value }));
});
"""

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
<style>{style}</style>
</head>
<body>
<div class="glow"></div>
<div class="card">
<form id="prompt-form">
<h1>{title}</h1>
<div id="prompt-field" class="{field_class}">
<input id="prompt-input" type="text" value="{value}" placeholder="{placeholder}" autocomplete="off">
<div class="underline"></div>
</div>
<div id="status">{status}</div>
</form>
</div>
<script>{script}</script>
</body>
</html>
"""
