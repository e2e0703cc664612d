"""One-shot operator signals for the live collection loop."""

from dataclasses import dataclass

KEY_ESC = 27
KEY_SAVE_FACE = ord(" ")
KEY_SAVE_PORTRAIT = ord("p")


@dataclass
class OperatorSignals:
    """Flags raised by operator key presses.

    ``save_face`` and ``save_portrait`` are cleared by the pipeline the
    first time a face consumes them, so one key press triggers at most one
    save.
    """

    save_face: bool = False
    save_portrait: bool = False
    exit: bool = False

    def handle_key(self, key: int) -> None:
        """Raise the flag bound to a key code (as returned by ``cv2.waitKey``)."""
        if key < 0:
            return
        key &= 0xFF
        if key == KEY_ESC:
            self.exit = True
        elif key == KEY_SAVE_FACE:
            self.save_face = True
        elif key == KEY_SAVE_PORTRAIT:
            self.save_portrait = True

    def consume_save_face(self) -> bool:
        pending, self.save_face = self.save_face, False
        return pending

    def consume_save_portrait(self) -> bool:
        pending, self.save_portrait = self.save_portrait, False
        return pending
