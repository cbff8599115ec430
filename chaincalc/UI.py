# UI.py
""""PySide6 user interface for the chained calculator.

Structure
---------
- Calculator UI: main window with expression line, result line and button grid
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, displays, layout and buttons
- Forward every button press / key press to the CalculatorSession
- Render the expression text and the result text the session hands back
- Clipboard integration (copy button, optional copy after '=')

The window holds no calculation logic. Everything runs on the Qt event thread,
so the session is only ever touched by one thread.


Responsibilities (Settings)
---------------------------

- Load Current Settings and Settings Descriptions via Config_Manager
- Save and apply theme changes immediately
"""""

from PySide6 import QtWidgets
from PySide6.QtCore import Qt, Signal
import sys
import pyperclip
from . import error as E  # Imports error.py as a module
from . import config_manager as config_manager  # Imports config_manager.py as a module
from . import Evaluator as Evaluator
from .Session import CalculatorSession

DARK_STYLESHEET = """
    QWidget {background-color: #121212; color: white;}
    QLineEdit {background-color: #121212; color: white; border: none;}
    QPushButton {background-color: #333333; color: white; border: 1px solid #444444;}
    QCheckBox {color: white;}"""


def copy_to_clipboard(text):
    """Copy text to the system clipboard. Missing clipboard backends are reported, not raised."""
    try:
        pyperclip.copy(text)
        return True
    except pyperclip.PyperclipException as e:
        error = E.MathError(f"Clipboard not available: {e}", code="4001")
        print(E.describe(error))
        return False


class SettingsDialog(QtWidgets.QDialog):
    """""

    Settings window. Every setting in config.json is a boolean and gets a checkbox,
    labelled with its description from ui_strings.json.

    """""

    settings_saved = Signal()  # Signal to tell the main window to update

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}

        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(300, 150)
        main_layout = QtWidgets.QVBoxLayout(self)

        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)
            checkbox = QtWidgets.QCheckBox(description)
            checkbox.setChecked(bool(value))
            main_layout.addWidget(checkbox)
            self.widgets[key_value] = checkbox

        button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.StandardButton.Ok | QtWidgets.QDialogButtonBox.StandardButton.Cancel)
        main_layout.addWidget(button_box)

        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self):
        for key_value, checkbox in self.widgets.items():
            self.setting_value_list[key_value] = checkbox.isChecked()

        saved_settings = config_manager.save_setting(self.setting_value_list)

        if saved_settings != {}:
            self.settings_saved.emit()
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           "Settings could not be saved (error in config_manager).")

    def update_darkmode(self):
        if self.setting_value_list.get("darkmode") == True:
            self.setStyleSheet(DARK_STYLESHEET)
        else:
            self.setStyleSheet("")


class CalculatorWindow(QtWidgets.QWidget):

    def __init__(self, config=None):
        super().__init__()

        # --- 1. Load Settings and Text Resources ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.config = config or config_manager.load_text_resources()
        self.session = CalculatorSession(self.config)

        # --- 2. Window Setup ---
        self.button_objects = {}
        self.setWindowTitle("Calculator")
        self.resize(320, 480)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 3. Display Setup ---
        # Expression line (what is being typed) and result line (last '=')
        self.expression = QtWidgets.QLineEdit(self.session.expression_text)
        self.expression.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.expression.setReadOnly(True)
        font = self.expression.font()
        font.setPointSize(28)
        self.expression.setFont(font)
        main_v_layout.addWidget(self.expression)

        self.result = QtWidgets.QLineEdit("")
        self.result.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.result.setReadOnly(True)
        font = self.result.font()
        font.setPointSize(20)
        self.result.setFont(font)
        main_v_layout.addWidget(self.result)

        # --- 4. Button Grid Setup ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 1)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(0)
        button_grid.setContentsMargins(0, 0, 0, 0)

        multiply = self.config.multiply_display
        divide = self.config.divide_display
        dot = self.config.dot_glyph

        # (text, row, column[, row span, column span])
        self.buttons = [
            ('⚙', 0, 0), ('📋', 0, 1), ('C', 0, 2), (divide, 0, 3),
            ('7', 1, 0), ('8', 1, 1), ('9', 1, 2), (multiply, 1, 3),
            ('4', 2, 0), ('5', 2, 1), ('6', 2, 2), ('-', 2, 3),
            ('1', 3, 0), ('2', 3, 1), ('3', 3, 2), ('+', 3, 3),
            (dot, 4, 0), ('0', 4, 1), ('=', 4, 2, 1, 2),
        ]

        for row_data in self.buttons:
            text = row_data[0]
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)

            if text == '⚙':
                button.clicked.connect(self.open_settings)
            elif text == '📋':
                button.clicked.connect(self.copy_result)
            else:
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))

            if text == '=':
                button.setStyleSheet("background-color: #007bff; color: white; font-weight: bold;")

            button_grid.addWidget(button, *row_data[1:])
            self.button_objects[text] = button

        self.update_darkmode()

    # --- Event Forwarding ---
    def handle_button_press(self, value):
        outcome = self.session.dispatch(value)

        if isinstance(outcome, Evaluator.EvaluationResult):
            self.show_result(outcome)

        self.expression.setText(self.session.expression_text)
        self.result.setText(self.session.result_text)

    def show_result(self, outcome):
        if outcome.kind == Evaluator.EvaluationResult.INCOMPLETE:
            # Nothing to evaluate, the session already printed the reason
            return

        if outcome.kind == Evaluator.EvaluationResult.VALUE and \
                self.setting_value_list.get("copy_result_on_equals") == True:
            copy_to_clipboard(outcome.display)

    def keyPressEvent(self, event):
        key = event.key()
        if key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.handle_button_press("=")
        elif key == Qt.Key.Key_Escape:
            self.handle_button_press("C")
        elif event.text():
            self.handle_button_press(event.text())
        else:
            super().keyPressEvent(event)

    def copy_result(self):
        if self.session.result_text:
            copy_to_clipboard(self.session.result_text)

    # --- Settings ---
    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.settings_saved.connect(self.reload_settings)
        settings_dialog.exec()

    def reload_settings(self):
        self.setting_value_list = config_manager.load_setting_value("all")
        self.update_darkmode()

    def update_darkmode(self):
        if self.setting_value_list.get("darkmode") == True:
            self.setStyleSheet(DARK_STYLESHEET)
        else:
            self.setStyleSheet("")


def main():
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
