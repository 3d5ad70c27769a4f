"""
Main NiceGUI application for the mind-map editor.

Creates one EditorSession per page, renders it with ui.echart, and wires the
toolbar, keyboard shortcuts and chart clicks to EditActions. All document
logic lives in mindmap.*; this file is layout only.
"""

import logging
import sys

from dotenv import load_dotenv
from nicegui import ui

from mindmap.chart_builder import build_echart_options, font_size_px, REQUESTED_EVENT_KEYS
from mindmap.config import load_settings
from mindmap.edit import EditActions
from mindmap.edit.handlers import setup_edit_handlers
from mindmap.session import EditorSession

load_dotenv()
settings = load_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)


@ui.page('/')
def main_page():
    session = EditorSession(settings)
    actions = EditActions(session)
    state = {'is_shift_pressed': False, 'syncing': False}

    def get_current_options():
        return build_echart_options(session.to_graph(), session.selection.ids)

    def refresh_chart_ui():
        chart.options.clear()
        chart.options.update(get_current_options())
        chart.update()
        undo_btn.set_enabled(session.history.can_undo)
        redo_btn.set_enabled(session.history.can_redo)
        sync_style_controls()

    handlers = setup_edit_handlers(state, actions, refresh_chart_ui)
    run_command = handlers['run_command']

    def open_relabel_dialog():
        selected = session.selection.ids
        if len(selected) != 1:
            ui.notify('Select one node to rename', position='bottom')
            return
        node = session.store.get_node(selected[0])
        with ui.dialog() as dialog, ui.card():
            ui.label('Rename node')
            text = ui.input('Label', value=node.label).classes('w-64')

            def save():
                run_command('relabel', node.id, text.value)
                dialog.close()

            with ui.row():
                ui.button('Cancel', on_click=dialog.close).props('flat')
                ui.button('Save', on_click=save).props('color=primary')
        dialog.open()

    def add_to_selected():
        selected = session.selection.ids
        run_command('add', selected[0] if len(selected) == 1 else None)

    def change_style(key, value):
        # Controls echo programmatic updates back as change events
        if state['syncing'] or value in (None, ''):
            return
        run_command('set_style', key, value)

    style = session.current_style
    with ui.row().classes('w-full items-center gap-2 p-2'):
        ui.button('+ Add', on_click=add_to_selected)
        ui.button('- Delete', on_click=lambda: run_command('delete'))
        undo_btn = ui.button('Undo', on_click=lambda: run_command('undo'))
        redo_btn = ui.button('Redo', on_click=lambda: run_command('redo'))
        ui.button('Copy', on_click=lambda: run_command('copy'))
        ui.button('Cut', on_click=lambda: run_command('cut'))
        ui.button('Paste', on_click=lambda: run_command('paste'))
        ui.button('Connect', on_click=handlers['connect_selected'])
        ui.button('Rename', on_click=open_relabel_dialog)

        font_size = ui.number('Font size', value=font_size_px(style['fontSize']), min=1,
                              on_change=lambda e: change_style('fontSize', str(int(e.value)) if e.value else None))
        font_style = ui.select(['normal', 'bold', 'italic'], label='Font style', value=style['fontStyle'],
                               on_change=lambda e: change_style('fontStyle', e.value))
        font_color = ui.color_input('Font color', value=style['fontColor'],
                                    on_change=lambda e: change_style('fontColor', e.value))
        branch_color = ui.color_input('Branch color', value=style['strokeColor'],
                                      on_change=lambda e: change_style('strokeColor', e.value))

    def sync_style_controls():
        current = session.current_style
        state['syncing'] = True
        try:
            font_size.set_value(font_size_px(current['fontSize']))
            font_style.set_value(current['fontStyle'])
            font_color.set_value(current['fontColor'])
            branch_color.set_value(current['strokeColor'])
        finally:
            state['syncing'] = False

    ui.keyboard(on_key=handlers['handle_keyboard'])

    chart = ui.echart(get_current_options()).classes('w-full').style('height: 80vh')
    chart.on('chart:click', handlers['handle_chart_click'], REQUESTED_EVENT_KEYS)
    chart.on('chart:dblclick', handlers['handle_chart_dblclick'], REQUESTED_EVENT_KEYS)

    undo_btn.set_enabled(False)
    redo_btn.set_enabled(False)


if __name__ in {"__main__", "__mp_main__"}:
    ui.run(
        title='Mind Map',
        port=8081,
        reload=not getattr(sys, 'frozen', False),
    )
