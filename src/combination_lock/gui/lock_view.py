"""
Lock Widgets

Kivy views over the lock model:
- WheelView: canvas-drawn symbol column, animated scrolling
- SegmentView: next/previous buttons around a wheel, active highlight
- LockView: row of segments, wrong-combination flash, message line
"""

from kivy.uix.widget import Widget
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.label import Label
from kivy.graphics import Color, Rectangle, Line
from kivy.properties import NumericProperty, BooleanProperty
from kivy.animation import Animation
from kivy.core.text import Label as CoreLabel

from ..actions import Action
from ..wheel import Wheel


class WheelView(Widget):
    """Shows three symbols of a wheel, the current one in the middle"""

    offset = NumericProperty(1)  # Scroll index, fractional while animating
    cloaked = BooleanProperty(True)

    COLOR_BG = (0.12, 0.12, 0.14, 1)
    COLOR_BORDER = (0.3, 0.3, 0.3, 1)
    COLOR_CURRENT = (1.0, 1.0, 0.9, 1)
    COLOR_OTHER = (0.6, 0.6, 0.6, 0.5)

    def __init__(self, wheel: Wheel, **kwargs):
        super().__init__(**kwargs)
        self.wheel = wheel
        self.offset = wheel.index
        wheel.on_scroll = self.scroll_to
        wheel.on_uncloak = self._uncloak
        self.bind(
            pos=self._update_canvas,
            size=self._update_canvas,
            offset=self._update_canvas,
            cloaked=self._update_canvas
        )
        self._update_canvas()

    def scroll_to(self, index: int, animate: bool):
        Animation.cancel_all(self, 'offset')
        if animate and not self.cloaked:
            Animation(offset=index, duration=Wheel.SCROLL_DURATION, t='out_quad').start(self)
        else:
            self.offset = index

    def _uncloak(self):
        self.cloaked = False

    def _update_canvas(self, *args):
        self.canvas.clear()
        with self.canvas:
            # Background
            Color(*self.COLOR_BG)
            Rectangle(pos=self.pos, size=self.size)

            # Border
            Color(*self.COLOR_BORDER)
            Line(rectangle=(*self.pos, *self.size), width=1)

            if self.cloaked:
                return

            item_height = self.height / 3
            font_size = max(10, item_height * 0.6)

            for i, symbol in enumerate(self.wheel.items):
                distance = i - self.offset
                # Only the visible window: one symbol above and below
                if abs(distance) > 1.5:
                    continue

                cy = self.center_y - distance * item_height
                is_current = abs(distance) < 0.5

                label = CoreLabel(text=symbol, font_size=font_size, bold=is_current)
                label.refresh()
                texture = label.texture

                Color(*(self.COLOR_CURRENT if is_current else self.COLOR_OTHER))
                Rectangle(
                    texture=texture,
                    pos=(self.center_x - texture.width / 2, cy - texture.height / 2),
                    size=texture.size
                )


class SegmentView(BoxLayout):
    """One lock segment: next button, wheel, previous button"""

    COLOR_ACTIVE = (0.9, 0.8, 0.2, 1)
    COLOR_INACTIVE = (0.2, 0.2, 0.22, 1)

    def __init__(self, lock, segment, **kwargs):
        super().__init__(**kwargs)
        self.orientation = 'vertical'
        self.padding = 4
        self.spacing = 4

        self.lock = lock
        self.segment = segment

        self.next_btn = Button(text='▲', size_hint_y=0.2)
        self.next_btn.bind(on_press=lambda *a: self._on_turn(Action.NEXT))

        self.wheel_view = WheelView(segment.wheel, size_hint_y=0.6)
        self.wheel_view.bind(size=self._on_wheel_size)

        self.previous_btn = Button(text='▼', size_hint_y=0.2)
        self.previous_btn.bind(on_press=lambda *a: self._on_turn(Action.PREVIOUS))

        self.add_widget(self.next_btn)
        self.add_widget(self.wheel_view)
        self.add_widget(self.previous_btn)

        self.bind(pos=self._update_canvas, size=self._update_canvas)
        segment.on_update = self._refresh
        self._refresh(segment)

    def _on_turn(self, action: Action):
        """Pointer input also moves the roving focus to this segment"""
        self.lock.focus_segment(self.segment.index)
        self.lock.dispatch(action)

    def _on_wheel_size(self, instance, size):
        # Symbols are positioned from the height, reveal once it is known
        if self.segment.wheel.cloaked and size[1] > 1:
            self.segment.handle_visible()

    def _refresh(self, segment):
        self.next_btn.disabled = not segment.accepts_input
        self.previous_btn.disabled = not segment.accepts_input
        self._update_canvas()

    def _update_canvas(self, *args):
        self.canvas.before.clear()
        with self.canvas.before:
            Color(*(self.COLOR_ACTIVE if self.segment.is_active else self.COLOR_INACTIVE))
            Line(rectangle=(self.x + 1, self.y + 1, self.width - 2, self.height - 2), width=2)


class LockView(BoxLayout):
    """Segment row with message line"""

    flash = NumericProperty(0)  # Red overlay strength for wrong combinations

    def __init__(self, lock, **kwargs):
        super().__init__(**kwargs)
        self.orientation = 'vertical'
        self.spacing = 10
        self.lock = lock

        self.row = BoxLayout(orientation='horizontal', spacing=8)
        self.segment_views = [SegmentView(lock, segment) for segment in lock.segments]
        for view in self.segment_views:
            self.row.add_widget(view)

        self.message_label = Label(
            text=lock.get_message(),
            size_hint_y=None,
            height=36,
            font_size='16sp',
            color=(0.85, 0.85, 0.85, 1)
        )

        self.add_widget(self.row)
        self.add_widget(self.message_label)

        lock.on_message = self._on_message
        lock.on_animation = self._on_animation

        self.bind(pos=self._update_canvas, size=self._update_canvas, flash=self._update_canvas)

    def _on_message(self, text: str):
        self.message_label.text = text

    def _on_animation(self, active: bool):
        if not active:
            Animation.cancel_all(self, 'flash')
            self.flash = 0
            return
        anim = Animation(flash=1, duration=0.1) + Animation(flash=0, duration=0.35)
        # The model's timer ends the animation too, handle_animation_end is idempotent
        anim.bind(on_complete=lambda *a: self.lock.handle_animation_end())
        anim.start(self)

    def _update_canvas(self, *args):
        self.canvas.before.clear()
        if self.flash <= 0:
            return
        with self.canvas.before:
            Color(0.8, 0.2, 0.2, 0.5 * self.flash)
            Rectangle(pos=self.row.pos, size=self.row.size)
