"""
Edit Handlers - UI event wiring between the NiceGUI page and EditActions.

Keeps app.py focused on layout: keyboard shortcuts, chart clicks and toolbar
buttons all end up in run_command, which calls into EditActions, reports
surfaced errors, and refreshes the chart.
"""

import logging
from typing import Any, Callable, Dict, Optional

from nicegui import ui

from mindmap.chart_builder import normalize_click_payload, resolve_node_id_from_payload
from mindmap.edit.actions import EditActions
from mindmap.exceptions import MindMapError

logger = logging.getLogger(__name__)

# Ctrl/Cmd + key
CTRL_BINDINGS = {
    'z': 'undo',
    'y': 'redo',
    'c': 'copy',
    'x': 'cut',
    'v': 'paste',
}
PLAIN_BINDINGS = {
    'delete': 'delete',
    'backspace': 'delete',
}


def command_for_key(key: str, ctrl: bool = False, shift: bool = False) -> Optional[str]:
    """Map a key press to an EditActions command name, or None."""
    name = str(getattr(key, 'name', key) or '').lower()
    if ctrl:
        if name == 'z' and shift:
            return 'redo'
        return CTRL_BINDINGS.get(name)
    return PLAIN_BINDINGS.get(name)


def setup_edit_handlers(
    state: Dict[str, Any],
    actions: EditActions,
    refresh_chart_ui: Callable,
):
    """
    Set up all edit event handlers.

    Args:
        state: App state dictionary (tracks modifier keys)
        actions: EditActions bound to the page's session
        refresh_chart_ui: Function to redraw the chart from the session

    Returns:
        Dict with handler functions for binding to UI events
    """

    def run_command(name: str, *args) -> Any:
        """Run one EditActions command; surfaced errors become notifications."""
        try:
            result = getattr(actions, name)(*args)
        except MindMapError as e:
            logger.warning(f"{name} failed: {e}")
            ui.notify(f'{name.capitalize()} failed: {e}', type='negative', position='bottom')
            return None
        refresh_chart_ui()
        return result

    def handle_keyboard(e):
        """Track Shift for multi-select and dispatch shortcuts on keydown."""
        key = str(getattr(e.key, 'name', e.key))
        if key == 'Shift':
            state['is_shift_pressed'] = e.action.keydown
            return
        if not e.action.keydown:
            return
        ctrl = bool(e.modifiers.ctrl or e.modifiers.meta)
        command = command_for_key(key, ctrl=ctrl, shift=bool(e.modifiers.shift))
        if command:
            run_command(command)

    def handle_chart_click(event):
        """Select the clicked node; Shift toggles it in a multi-selection; background clears."""
        raw = event.args if hasattr(event, 'args') else event
        payload = normalize_click_payload(raw)
        node_id = resolve_node_id_from_payload(payload, actions.session.store.node_ids)

        if node_id is None:
            actions.on_selection_changed([])
        elif state.get('is_shift_pressed'):
            current = actions.session.selection.ids
            if node_id in current:
                current.remove(node_id)
            else:
                current.append(node_id)
            actions.on_selection_changed(current)
        else:
            actions.on_selection_changed([node_id])
        refresh_chart_ui()

    def handle_chart_dblclick(event):
        """Double-clicking a node acts as its "+" button."""
        raw = event.args if hasattr(event, 'args') else event
        node_id = resolve_node_id_from_payload(normalize_click_payload(raw), actions.session.store.node_ids)
        if node_id:
            run_command('add', node_id)

    def connect_selected():
        """Connect the first selected node to the second, in selection order."""
        selected = actions.session.selection.ids
        if len(selected) != 2:
            ui.notify('Select exactly two nodes to connect', position='bottom')
            return None
        return run_command('connect', selected[0], selected[1])

    return {
        'run_command': run_command,
        'handle_keyboard': handle_keyboard,
        'handle_chart_click': handle_chart_click,
        'handle_chart_dblclick': handle_chart_dblclick,
        'connect_selected': connect_selected,
    }
