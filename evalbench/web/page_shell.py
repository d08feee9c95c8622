"""Shared HTML shell: <head>, header, info overlay, theme handling and common JavaScript."""

from __future__ import annotations

import html

from evalbench.core.about import AUTHOR, AUTHOR_URL, DESCRIPTION, LANGUAGE_LABEL, LANGUAGE_URL, TITLE


def head_html(storage_key: str) -> str:
    """Return everything inside <head>, including the pre-paint theme script."""
    return """\
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>__TITLE__</title>
    <link rel="icon" type="image/svg+xml" href="/web/logo-light.svg" />
    <link rel="preconnect" href="https://fonts.googleapis.com" />
    <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin />
    <link href="https://fonts.googleapis.com/css2?family=Plus+Jakarta+Sans:wght@400;500;600;700&family=Geist+Mono:wght@400;500&display=swap" rel="stylesheet" />
    <script>
      /* first paint: apply the stored theme before the API answers */
      (function() {
        const mode = localStorage.getItem('__STORAGE_KEY__') || 'system';
        const dark = mode === 'dark' || (mode === 'system' && window.matchMedia('(prefers-color-scheme: dark)').matches);
        document.documentElement.classList.add(dark ? 'dark' : 'light');
      })();
    </script>
    <script src="https://cdn.tailwindcss.com"></script>
    <script>
      tailwind.config = {
        darkMode: 'class',
        theme: {
          extend: {
            fontFamily: {
              sans: ['Plus Jakarta Sans', 'system-ui', '-apple-system', 'sans-serif'],
              mono: ['Geist Mono', 'ui-monospace', 'monospace'],
            },
            colors: {
              w: {
                bg:      'var(--c-bg)',
                surface: 'var(--c-surface)',
                panel:   'var(--c-panel)',
                border:  'var(--c-border)',
                muted:   'var(--c-muted)',
                text:    'var(--c-text)',
                bright:  'var(--c-bright)',
              }
            },
          }
        }
      }
    </script>
    <style>
      /* ---- Theme tokens ---- */
      :root, html.light {
        --c-bg: #ffffff; --c-surface: #f6f6f7; --c-panel: #eeeef0;
        --c-border: #d4d4d8; --c-muted: #71717a; --c-text: #18181b; --c-bright: #09090b;
        --c-backdrop: rgba(0,0,0,0.3);
      }
      html.dark {
        --c-bg: #09090b; --c-surface: #121215; --c-panel: #1b1b1f;
        --c-border: #2e2e33; --c-muted: #8b8b94; --c-text: #e4e4e7; --c-bright: #fafafa;
        --c-backdrop: rgba(0,0,0,0.55);
      }
      html { -webkit-font-smoothing: antialiased; }

      /* panes */
      .pane { display: flex; flex-direction: column; min-height: 0; }
      .pane.hidden-pane { display: none; }
      .pane textarea, .pane pre { flex: 1; min-height: 50vh; resize: none; }
      .workbench-grid { display: grid; grid-template-columns: 1fr; gap: 12px; }
      .workbench-grid.wide { grid-template-columns: 1fr auto 1fr; }

      /* exclusive toggle */
      .mode-btn[aria-pressed="true"] { background: var(--c-bg); color: var(--c-bright); box-shadow: 0 1px 2px rgba(0,0,0,0.12); }

      /* overlay */
      #overlay-backdrop { background: var(--c-backdrop); }
      @keyframes popIn { from { opacity: 0; transform: scale(0.97); } to { opacity: 1; transform: scale(1); } }
      #overlay-content { animation: popIn 120ms ease; }

      /* toast */
      @keyframes toastIn { from { opacity: 0; transform: translateY(6px); } to { opacity: 1; transform: translateY(0); } }
      .toast-enter { animation: toastIn 200ms ease; }
    </style>""".replace("__TITLE__", html.escape(TITLE)).replace("__STORAGE_KEY__", storage_key)


def header_html() -> str:
    """Return the header bar: title, info-overlay trigger and theme control."""
    return """\
      <!-- Header -->
      <header class="flex justify-between items-center mt-12 md:mt-16 w-full pb-4 mb-4 border-b border-w-border">
        <div class="text-xl font-medium text-w-bright">__TITLE__</div>
        <div class="flex items-center gap-3">
          <button id="info-open" type="button" class="h-9 w-9 rounded-md flex items-center justify-center text-w-text hover:bg-w-panel transition-colors" title="About">
            <svg xmlns="http://www.w3.org/2000/svg" width="22" height="22" class="fill-current" viewBox="0 0 256 256"><path d="M128,24A104,104,0,1,0,232,128,104.11,104.11,0,0,0,128,24Zm0,192a88,88,0,1,1,88-88A88.1,88.1,0,0,1,128,216Zm16-40a8,8,0,0,1-8,8,16,16,0,0,1-16-16V128a8,8,0,0,1,0-16,16,16,0,0,1,16,16v40A8,8,0,0,1,144,176ZM112,84a12,12,0,1,1,12,12A12,12,0,0,1,112,84Z"></path></svg>
          </button>
          <!-- Theme control -->
          <div class="flex bg-w-surface border border-w-border rounded-lg p-0.5 gap-0.5" role="radiogroup" aria-label="Theme">
            <button class="theme-btn px-2.5 py-1.5 rounded-md text-[12px] text-w-muted" data-theme="light" title="Light">Light</button>
            <button class="theme-btn px-2.5 py-1.5 rounded-md text-[12px] text-w-muted" data-theme="dark" title="Dark">Dark</button>
            <button class="theme-btn px-2.5 py-1.5 rounded-md text-[12px] text-w-muted" data-theme="system" title="System">System</button>
          </div>
        </div>
      </header>""".replace("__TITLE__", html.escape(TITLE))


def overlay_html() -> str:
    """Return the info overlay: a dimmed backdrop wrapping the dialog content region."""
    return (
        """\
    <!-- Info overlay -->
    <div id="overlay-backdrop" class="hidden fixed inset-0 z-40 justify-center items-center">
      <div id="overlay-content" role="dialog" aria-modal="true" aria-labelledby="overlay-title" class="flex flex-col border border-w-border rounded w-80 bg-w-bg">
        <div class="p-4 flex border-b border-w-border justify-between items-center">
          <span id="overlay-title" class="font-medium text-lg">About</span>
          <button id="overlay-close" type="button" class="h-8 w-8 rounded-md flex items-center justify-center hover:bg-w-panel" title="Close">
            <svg xmlns="http://www.w3.org/2000/svg" width="20" height="20" class="fill-current" viewBox="0 0 256 256"><path d="M205.66,194.34a8,8,0,0,1-11.32,11.32L128,139.31,61.66,205.66a8,8,0,0,1-11.32-11.32L116.69,128,50.34,61.66A8,8,0,0,1,61.66,50.34L128,116.69l66.34-66.35a8,8,0,0,1,11.32,11.32L139.31,128Z"></path></svg>
          </button>
        </div>
        <div class="p-4 gap-4 border-b border-w-border flex flex-col items-center">
          <img id="overlay-logo" src="/web/logo-light.svg" alt="__LANGUAGE__" class="max-w-[150px]" />
          <div class="flex flex-col items-start">
            <p class="font-medium text-lg">__TITLE__</p>
            <p class="text-w-muted">__DESCRIPTION__ <a href="__LANGUAGE_URL__" target="_blank" rel="noopener" class="underline font-medium">__LANGUAGE__</a></p>
          </div>
        </div>
        <div class="p-4 flex items-center bg-w-surface">
          <p class="text-w-muted text-sm">Made with &#9829; by <a href="__AUTHOR_URL__" target="_blank" rel="noopener" class="underline font-medium">__AUTHOR__</a></p>
        </div>
      </div>
    </div>"""
        .replace("__TITLE__", html.escape(TITLE))
        .replace("__DESCRIPTION__", html.escape(DESCRIPTION))
        .replace("__LANGUAGE_URL__", html.escape(LANGUAGE_URL))
        .replace("__LANGUAGE__", html.escape(LANGUAGE_LABEL))
        .replace("__AUTHOR_URL__", html.escape(AUTHOR_URL))
        .replace("__AUTHOR__", html.escape(AUTHOR))
    )


def shared_js(storage_key: str) -> str:
    """Return shared JS: state, fetchJSON, toast, theme system and overlay handling."""
    return """\
      const THEME_KEY = '__STORAGE_KEY__';
      const state = {
        sessionId: null,
        snapshot: null,
        theme: null,
        inputText: '',
        edited: false,
        inputTimer: null,
        viewportTimer: null,
        refreshTimer: null
      };

      function byId(id) { return document.getElementById(id); }

      async function fetchJSON(url, options) {
        const response = await fetch(url, { cache: 'no-store', headers: { 'Content-Type': 'application/json' }, ...(options || {}) });
        if (!response.ok) {
          let detail = response.statusText;
          try { const p = await response.json(); detail = (p.detail && p.detail.message) || p.detail || JSON.stringify(p); } catch (err) {}
          const error = new Error(typeof detail === 'string' ? detail : JSON.stringify(detail));
          error.status = response.status;
          throw error;
        }
        return response.json();
      }

      function showToast(message, type) {
        if (!message) return;
        const el = document.createElement('div');
        const color = type === 'error' ? 'text-red-500 border-red-500/30' : 'text-w-muted border-w-border';
        el.className = `bg-w-surface border ${color} rounded-lg px-3.5 py-2 text-[13px] shadow-lg pointer-events-auto max-w-[340px] toast-enter`;
        el.textContent = message;
        byId('toast-container').appendChild(el);
        setTimeout(() => el.remove(), 2800);
      }

      /* ============ Theme system ============ */
      function systemAppearance() { return window.matchMedia('(prefers-color-scheme: dark)').matches ? 'dark' : 'light'; }

      function renderTheme(theme) {
        state.theme = theme;
        const root = document.documentElement;
        root.classList.toggle('dark', theme.resolved === 'dark');
        root.classList.toggle('light', theme.resolved === 'light');
        localStorage.setItem(THEME_KEY, theme.preference);
        document.querySelectorAll('.theme-btn').forEach(btn => {
          const active = btn.dataset.theme === theme.preference;
          btn.setAttribute('aria-checked', String(active));
          btn.classList.toggle('bg-w-bg', active);
          btn.classList.toggle('text-w-bright', active);
          btn.classList.toggle('text-w-muted', !active);
        });
        byId('overlay-logo').src = theme.resolved === 'dark' ? '/web/logo-dark.svg' : '/web/logo-light.svg';
      }

      async function setThemePreference(preference) {
        if (!state.sessionId) return;
        try { renderTheme(await fetchJSON(`/api/sessions/${state.sessionId}/theme`, { method: 'PUT', body: JSON.stringify({ preference }) })); }
        catch (e) { showToast(e.message, 'error'); }
      }

      /* the OS appearance is per client; the server keeps it on this session only */
      async function reportSystemAppearance() {
        if (!state.sessionId) return;
        try { renderTheme(await fetchJSON(`/api/sessions/${state.sessionId}/appearance`, { method: 'PUT', body: JSON.stringify({ appearance: systemAppearance() }) })); }
        catch (e) { showToast(e.message, 'error'); }
      }

      /* ============ Info overlay ============ */
      function renderOverlay(overlay) {
        const backdrop = byId('overlay-backdrop');
        backdrop.classList.toggle('hidden', !overlay.visible);
        backdrop.classList.toggle('flex', overlay.visible);
      }

      async function overlayAction(action, region) {
        if (!state.sessionId) return;
        const body = region ? { action, region } : { action };
        try { renderSnapshot(await fetchJSON(`/api/sessions/${state.sessionId}/overlay`, { method: 'POST', body: JSON.stringify(body) })); }
        catch (e) { showToast(e.message, 'error'); }
      }

      function clickRegion(target) { return target.closest('#overlay-content') ? 'content' : 'backdrop'; }""".replace(
        "__STORAGE_KEY__", storage_key
    )


def init_js() -> str:
    """Return the init/bindEvents JS that wires header, overlay and workbench together."""
    return """\
      /* ============ Events ============ */
      function bindEvents() {
        document.querySelectorAll('.theme-btn').forEach(b => b.addEventListener('click', () => setThemePreference(b.dataset.theme)));
        window.matchMedia('(prefers-color-scheme: dark)').addEventListener('change', () => reportSystemAppearance());

        byId('info-open').addEventListener('click', () => overlayAction('toggle'));
        byId('overlay-close').addEventListener('click', (e) => { e.stopPropagation(); overlayAction('close'); });
        byId('overlay-backdrop').addEventListener('click', (e) => { e.stopPropagation(); overlayAction('click', clickRegion(e.target)); });
        /* the content region absorbs clicks so they never reach the backdrop handler */
        byId('overlay-content').addEventListener('click', (e) => { e.stopPropagation(); });

        document.addEventListener('keydown', (e) => {
          if (e.key === 'Escape' && state.snapshot && state.snapshot.overlay.visible) { e.preventDefault(); overlayAction('close'); }
        });

        bindWorkbenchEvents();
      }

      async function init() {
        bindEvents();
        try { await startSession(); }
        catch (e) { showToast(e.message, 'error'); }
      }
      init();"""
