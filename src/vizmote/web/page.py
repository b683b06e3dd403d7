"""Single-page browser remote served at ``/``."""

INDEX_HTML = """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>vizmote</title>
<style>
  body { font-family: system-ui, sans-serif; background: #111; color: #eee; margin: 0; }
  header { background: #1e3a8a; padding: 12px 16px; display: flex; justify-content: space-between; }
  main { max-width: 420px; margin: 16px auto; padding: 0 12px; }
  .hidden { display: none; }
  .grid { display: grid; grid-template-columns: repeat(3, 1fr); gap: 8px; margin: 12px 0; }
  button { padding: 14px 8px; border: 0; border-radius: 8px; background: #333; color: #eee; font-size: 15px; cursor: pointer; }
  button:active { background: #555; }
  input { padding: 10px; border-radius: 6px; border: 1px solid #444; background: #222; color: #eee; width: 100%; box-sizing: border-box; margin: 6px 0; }
  #logs { background: #000; border-radius: 6px; padding: 8px; height: 140px; overflow-y: auto; font: 12px monospace; }
  .log-ok { color: #4ade80; } .log-err { color: #f87171; } .log-warn { color: #facc15; }
</style>
</head>
<body>
<header><strong>vizmote</strong><span id="ip-badge">IP: -</span></header>
<main>
  <section id="pairing-panel" class="hidden">
    <input id="pair-ip" placeholder="Display IP address">
    <button id="pair-start">Start pairing</button>
    <div id="pairing-pin-row" class="hidden">
      <input id="pair-pin" placeholder="PIN shown on the display">
      <button id="pair-commit">Submit PIN</button>
      <button id="pair-cancel">Cancel</button>
    </div>
    <p id="pairing-msg"></p>
  </section>
  <section id="remote-panel" class="hidden">
    <div class="grid">
      <button data-cmd="POST /api/power/on">Power On</button>
      <button data-cmd="POST /api/app/home">Home</button>
      <button data-cmd="POST /api/power/off">Power Off</button>
      <span></span><button data-cmd="POST /api/nav/up">&#9650;</button><span></span>
      <button data-cmd="POST /api/nav/left">&#9664;</button>
      <button data-cmd="POST /api/nav/select">OK</button>
      <button data-cmd="POST /api/nav/right">&#9654;</button>
      <button data-cmd="POST /api/nav/back">Back</button>
      <button data-cmd="POST /api/nav/down">&#9660;</button>
      <button data-cmd="POST /api/menu">Settings</button>
      <button data-cmd="POST /api/volume/down">Vol -</button>
      <button data-cmd="POST /api/input/cycle">Input</button>
      <button data-cmd="POST /api/volume/up">Vol +</button>
    </div>
    <div class="grid">
      <button data-cmd="POST /api/app/youtube">YouTube</button>
      <button data-cmd="POST /api/app/hulu">Hulu</button>
      <button data-cmd="POST /api/app/netflix">Netflix</button>
      <button data-cmd="POST /api/app/plex">Plex</button>
      <button data-cmd="POST /api/app/disney">Disney+</button>
      <button data-cmd="POST /api/app/tubi">Tubi</button>
    </div>
    <button data-cmd="GET /api/info">Device info</button>
  </section>
  <pre id="logs"></pre>
</main>
<script>
(() => {
  const $ = (id) => document.getElementById(id);
  const show = (el, on) => el.classList.toggle('hidden', !on);

  function log(text, type) {
    const line = document.createElement('div');
    if (type) line.className = 'log-' + type;
    line.textContent = text;
    $('logs').appendChild(line);
    $('logs').scrollTop = $('logs').scrollHeight;
  }

  async function call(method, url, body) {
    const res = await fetch(url, {
      method,
      headers: { 'Content-Type': 'application/json' },
      body: body ? JSON.stringify(body) : undefined,
    });
    const data = await res.json().catch(() => ({}));
    if (!res.ok || data.ok === false) throw new Error(data.error || ('HTTP ' + res.status));
    return data;
  }

  function setPaired(paired, address) {
    $('ip-badge').textContent = 'IP: ' + (address || '-');
    show($('pairing-panel'), !paired);
    show($('remote-panel'), paired);
  }

  $('pair-start').onclick = async () => {
    const address = $('pair-ip').value.trim();
    if (!address) { $('pairing-msg').textContent = 'Please enter your display IP address.'; return; }
    try {
      await call('POST', '/api/pair/initiate', { address });
      $('pairing-msg').textContent = 'Enter the PIN shown on your display.';
      show($('pairing-pin-row'), true);
      $('pair-pin').focus();
    } catch (e) {
      $('pairing-msg').textContent = 'Pairing failed: ' + e.message;
    }
  };

  $('pair-commit').onclick = async () => {
    const pin = $('pair-pin').value.trim();
    if (!pin) { $('pairing-msg').textContent = 'Enter the PIN from your display.'; return; }
    try {
      const data = await call('POST', '/api/pair/commit', { pin });
      log('Paired with display at ' + data.address, 'ok');
      setPaired(true, data.address);
    } catch (e) {
      $('pairing-msg').textContent = 'PIN submission failed: ' + e.message;
      show($('pairing-pin-row'), false);
    }
  };

  $('pair-cancel').onclick = async () => {
    await call('POST', '/api/pair/cancel').catch(() => {});
    show($('pairing-pin-row'), false);
    $('pairing-msg').textContent = '';
  };

  document.querySelectorAll('[data-cmd]').forEach((btn) => {
    btn.onclick = async () => {
      const [method, url] = btn.dataset.cmd.split(' ');
      log('\\u2192 ' + btn.textContent + '...');
      try {
        const data = await call(method, url);
        log('\\u2713 ' + data.description, 'ok');
        if (data.data) log(JSON.stringify(data.data, null, 2));
      } catch (e) {
        log('\\u2717 ' + btn.textContent + ' failed: ' + e.message, 'err');
      }
    };
  });

  call('GET', '/api/status')
    .then((s) => setPaired(s.paired, s.address))
    .catch((e) => log('Status failed: ' + e.message, 'err'));
})();
</script>
</body>
</html>
"""
