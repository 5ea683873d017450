"""
Combination Lock App

Main Kivy application with:
- Lock view with one wheel per solution symbol
- Check / show solution / retry controls
- Keyboard navigation (arrows, Home, End, Enter)
- State saved on exit and restored on start
"""

import logging
from pathlib import Path

from kivy.app import App
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label
from kivy.uix.button import Button
from kivy.clock import Clock
from kivy.core.window import Window, Keyboard

from .lock_view import LockView
from ..actions import action_for_key
from ..config import CombinationLockParams, load_params, load_state, save_state
from ..controller import BUTTON_CHECK, BUTTON_SHOW_SOLUTION, BUTTON_RETRY, FOCUS_LOCK
from ..widget import CombinationLock

logger = logging.getLogger(__name__)

KEY_NAMES = {code: name for name, code in Keyboard.keycodes.items()}

# Control buttons: (id, text key)
CONTROLS = [
    (BUTTON_CHECK, 'l10n.check'),
    (BUTTON_SHOW_SOLUTION, 'l10n.showSolution'),
    (BUTTON_RETRY, 'l10n.retry'),
]


class ControlBar(BoxLayout):
    """Task control buttons, shown or hidden by the controller"""

    def __init__(self, task: CombinationLock, **kwargs):
        super().__init__(**kwargs)
        self.orientation = 'horizontal'
        self.size_hint_y = None
        self.height = 50
        self.spacing = 10

        self.task = task
        self.buttons = {}
        for button_id, text_key in CONTROLS:
            btn = Button(text=task.dictionary.get(text_key))
            btn.bind(on_press=lambda instance, bid=button_id: self._on_press(bid))
            self.buttons[button_id] = btn

        self.update(task.controller.buttons)

    def _on_press(self, button_id: str):
        self.task.press_button(button_id)

    def update(self, visibility: dict):
        """Rebuild the bar from the visible buttons"""
        self.clear_widgets()
        for button_id, _ in CONTROLS:
            if visibility.get(button_id):
                self.add_widget(self.buttons[button_id])


class MainLayout(BoxLayout):
    """Main application layout"""

    def __init__(self, task: CombinationLock, **kwargs):
        super().__init__(**kwargs)
        self.orientation = 'vertical'
        self.padding = 20
        self.spacing = 10

        self.task = task
        self.focus_target = FOCUS_LOCK

        self.title_label = Label(
            text=task.get_title(),
            size_hint_y=None,
            height=40,
            font_size='20sp'
        )
        self.lock_view = LockView(task.lock)
        self.controls = ControlBar(task)

        # Spoken text for assistive technology, shown small under the controls
        self.status_label = Label(
            text='',
            size_hint_y=None,
            height=24,
            font_size='12sp',
            color=(0.6, 0.6, 0.6, 1)
        )

        self.add_widget(self.title_label)
        self.add_widget(self.lock_view)
        self.add_widget(self.controls)
        self.add_widget(self.status_label)

        task.on_read = self._on_read
        task.controller.on_buttons_changed = self.controls.update
        task.controller.on_focus = self._on_focus
        task.lock.on_focus = lambda index: self._on_focus(FOCUS_LOCK)

        Window.bind(on_key_down=self._on_key_down)

    def _on_read(self, text: str):
        logger.info("Announce: %s", text)
        self.status_label.text = text

    def _on_focus(self, target: str):
        self.focus_target = target

    def _on_key_down(self, window, key, scancode, codepoint, modifiers):
        name = KEY_NAMES.get(key)
        if name in ('enter', 'numpadenter', 'spacebar'):
            if self.focus_target != FOCUS_LOCK:
                self.task.press_button(self.focus_target)
            elif self.task.controller.buttons.get(BUTTON_CHECK):
                self.task.press_button(BUTTON_CHECK)
            return True

        if action_for_key(name) is None:
            return False
        self.focus_target = FOCUS_LOCK
        self.task.press_key(name)
        return True

    def unbind_keyboard(self):
        Window.unbind(on_key_down=self._on_key_down)


class CombinationLockApp(App):
    """Main application class"""

    def __init__(self, config_path=None, state_path=None, **kwargs):
        super().__init__(**kwargs)
        self.config_path = config_path
        self.state_path = state_path
        self.task = None

    def _state_file(self) -> Path:
        if self.state_path:
            return Path(self.state_path)
        return Path(self.user_data_dir) / 'state.json'

    def build(self):
        if self.config_path:
            params = load_params(self.config_path)
        else:
            params = CombinationLockParams.from_dict({})

        previous_state = load_state(self._state_file())
        self.task = CombinationLock(params, previous_state, scheduler=Clock)
        self.title = self.task.get_title()
        return MainLayout(self.task)

    def on_stop(self):
        """Save state on app exit"""
        if self.root:
            self.root.unbind_keyboard()
        if self.task:
            save_state(self._state_file(), self.task.get_current_state())


def main(config_path=None, state_path=None):
    CombinationLockApp(config_path=config_path, state_path=state_path).run()


if __name__ == '__main__':
    main()
