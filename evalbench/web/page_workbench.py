"""Workbench section: editor/output panes, the narrow-layout toggle and the Run control."""

from __future__ import annotations


def workbench_section_html() -> str:
    """Return the <section id='workbench'> HTML block."""
    return """\
      <!-- ==================== WORKBENCH ==================== -->
      <section id="workbench" class="flex flex-col gap-3">
        <!-- Toolbar (narrow layouts only) -->
        <div id="wb-toolbar" class="hidden items-center justify-between gap-2">
          <div class="flex bg-w-surface border border-w-border rounded-lg p-0.5 gap-0.5" role="group" aria-label="View">
            <button class="mode-btn px-4 py-1.5 rounded-md text-[13px] font-medium text-w-muted" data-mode="editor" aria-pressed="true">Editor</button>
            <button class="mode-btn px-4 py-1.5 rounded-md text-[13px] font-medium text-w-muted" data-mode="output" aria-pressed="false">Output</button>
          </div>
          <div id="wb-trigger-toolbar"></div>
        </div>

        <div id="wb-grid" class="workbench-grid wide">
          <div id="pane-input" class="pane gap-1">
            <label for="wb-input" class="text-[11px] font-semibold text-w-muted uppercase tracking-widest">Input</label>
            <textarea id="wb-input" spellcheck="false" placeholder="let x = 1 + 2;" class="w-full rounded-lg border border-w-border bg-w-surface text-w-text font-mono text-[13px] p-3 focus:outline-none focus:border-blue-500"></textarea>
          </div>

          <div id="wb-trigger-middle" class="flex md:flex-col items-center justify-center">
            <button id="wb-run" type="button" disabled class="h-9 px-5 rounded-lg bg-w-bright text-w-bg text-[13px] font-semibold disabled:opacity-40 disabled:cursor-not-allowed active:scale-95 transition-all">
              <span id="wb-run-label">Loading&hellip;</span>
            </button>
          </div>

          <div id="pane-output" class="pane gap-1">
            <span class="text-[11px] font-semibold text-w-muted uppercase tracking-widest">Output</span>
            <pre id="wb-output" aria-live="polite" class="w-full rounded-lg border border-w-border bg-w-panel text-w-text font-mono text-[13px] p-3 whitespace-pre-wrap overflow-auto select-text"></pre>
          </div>
        </div>
        <p id="wb-status" class="text-[12px] text-w-muted"></p>
      </section>"""


def workbench_js() -> str:
    """Return the workbench JS: session lifecycle, edits, submit and layout rendering."""
    return """\
      /* ============ Workbench ============ */
      const INPUT_SYNC_MS = 150;
      const VIEWPORT_SYNC_MS = 120;
      const BINDING_POLL_MS = 400;
      const REFRESH_MS = 3000;

      async function startSession() {
        const snapshot = await fetchJSON('/api/sessions', { method: 'POST' });
        state.sessionId = snapshot.session_id;
        renderSnapshot(snapshot);
        await reportSystemAppearance();
        await syncViewport();
        scheduleRefresh();
      }

      /* fast while the interpreter loads, then slow enough to pick up theme changes made by other clients */
      function scheduleRefresh(delay) {
        clearTimeout(state.refreshTimer);
        const unready = !state.snapshot || state.snapshot.workbench.binding.status === 'unready';
        state.refreshTimer = setTimeout(async () => {
          try {
            renderSnapshot(await fetchJSON(`/api/sessions/${state.sessionId}`));
          } catch (e) {
            if (e.status === 404) { await startSession(); return; }
            showToast(e.message, 'error');
          }
          scheduleRefresh();
        }, delay !== undefined ? delay : (unready ? BINDING_POLL_MS : REFRESH_MS));
      }

      function onInput(e) {
        state.edited = true;
        state.inputText = e.target.value;
        clearTimeout(state.inputTimer);
        state.inputTimer = setTimeout(() => {
          fetchJSON(`/api/sessions/${state.sessionId}/input`, { method: 'PUT', body: JSON.stringify({ input_text: state.inputText }) })
            .catch(err => showToast(err.message, 'error'));
        }, INPUT_SYNC_MS);
      }

      async function submit() {
        if (!state.sessionId || !state.snapshot || !state.snapshot.workbench.can_submit) return;
        clearTimeout(state.inputTimer);
        const button = byId('wb-run');
        button.disabled = true;
        try {
          renderSnapshot(await fetchJSON(`/api/sessions/${state.sessionId}/submit`, {
            method: 'POST', body: JSON.stringify({ input_text: byId('wb-input').value })
          }));
        } catch (e) {
          showToast(e.message, 'error');
          if (e.status === 409) scheduleRefresh(BINDING_POLL_MS);
        } finally {
          if (state.snapshot) button.disabled = !state.snapshot.workbench.can_submit;
        }
      }

      async function setViewMode(mode) {
        try {
          renderSnapshot(await fetchJSON(`/api/sessions/${state.sessionId}/view-mode`, { method: 'PUT', body: JSON.stringify({ view_mode: mode }) }));
        } catch (e) { showToast(e.message, 'error'); }
      }

      async function syncViewport() {
        if (!state.sessionId) return;
        try {
          renderSnapshot(await fetchJSON(`/api/sessions/${state.sessionId}/viewport`, { method: 'PUT', body: JSON.stringify({ width: window.innerWidth }) }));
        } catch (e) { showToast(e.message, 'error'); }
      }

      function renderLayout(layout) {
        const wide = layout.width_class === 'wide';
        byId('wb-grid').classList.toggle('wide', wide);
        byId('wb-toolbar').classList.toggle('hidden', !layout.show_toggle);
        byId('wb-toolbar').classList.toggle('flex', layout.show_toggle);
        byId('pane-input').classList.toggle('hidden-pane', !layout.visible_panes.includes('input'));
        byId('pane-output').classList.toggle('hidden-pane', !layout.visible_panes.includes('output'));
        document.querySelectorAll('.mode-btn').forEach(btn => btn.setAttribute('aria-pressed', String(btn.dataset.mode === layout.view_mode)));

        /* one Run control, moved between the toolbar and the space between panes */
        const slot = layout.trigger_placement === 'toolbar' ? byId('wb-trigger-toolbar') : byId('wb-trigger-middle');
        const button = byId('wb-run');
        if (button.parentElement !== slot) slot.appendChild(button);
        byId('wb-trigger-middle').classList.toggle('hidden', layout.trigger_placement === 'toolbar');
      }

      function renderWorkbench(wb) {
        const input = byId('wb-input');
        if (!state.edited && document.activeElement !== input && input.value !== wb.input_text) input.value = wb.input_text;
        byId('wb-output').textContent = wb.result_text;
        byId('wb-output').classList.toggle('text-red-500', wb.phase === 'failed');

        const button = byId('wb-run');
        const label = byId('wb-run-label');
        button.disabled = !wb.can_submit;
        if (wb.binding.status === 'unready') label.textContent = 'Loading\\u2026';
        else if (wb.binding.status === 'unavailable') label.textContent = 'Unavailable';
        else label.textContent = 'Run';

        const status = byId('wb-status');
        if (wb.binding.status === 'unavailable') status.textContent = 'Interpreter unavailable: ' + (wb.binding.reason || 'failed to load');
        else if (wb.binding.status === 'unready') status.textContent = 'Loading interpreter\\u2026';
        else status.textContent = '';
      }

      function renderSnapshot(snapshot) {
        state.snapshot = snapshot;
        renderWorkbench(snapshot.workbench);
        renderLayout(snapshot.layout);
        renderOverlay(snapshot.overlay);
        renderTheme(snapshot.theme);
      }

      function bindWorkbenchEvents() {
        byId('wb-input').addEventListener('input', onInput);
        byId('wb-run').addEventListener('click', () => submit());
        byId('wb-input').addEventListener('keydown', e => { if (e.key === 'Enter' && (e.ctrlKey || e.metaKey)) { e.preventDefault(); submit(); } });
        document.querySelectorAll('.mode-btn').forEach(b => b.addEventListener('click', () => setViewMode(b.dataset.mode)));
        window.addEventListener('resize', () => {
          clearTimeout(state.viewportTimer);
          state.viewportTimer = setTimeout(syncViewport, VIEWPORT_SYNC_MS);
        });
      }"""
