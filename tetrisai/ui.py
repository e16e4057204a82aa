"""
Tkinter front end for tetrisai: draws the board, maps keys to commands and
drives the game clock with root.after().
"""

import tkinter as tk

from .core.commands import Command
from .game import Game
from .scheduler import TICK_SECONDS, cadence_for_lines

CELL_SIZE = 28
TICK_MS = int(TICK_SECONDS * 1000)

COLORS = {
    0: "#222222",  # Empty
    1: "#00e5ff",  # i
    2: "#2962ff",  # j
    3: "#ff9100",  # l
    4: "#ffea00",  # o
    5: "#aa00ff",  # t
    6: "#00e676",  # s
    7: "#ff1744",  # z
    'shadow': "#444444",
}

KEY_COMMANDS = {
    'Left': Command.LEFT, 'h': Command.LEFT, 'a': Command.LEFT,
    'Right': Command.RIGHT, 'l': Command.RIGHT, 'd': Command.RIGHT,
    'Up': Command.TRANSFORM, 'k': Command.TRANSFORM, 'w': Command.TRANSFORM,
    'space': Command.DROP,
    'Down': Command.FAST_FORWARD, 'j': Command.FAST_FORWARD, 's': Command.FAST_FORWARD,
}


class TetrisUI:
    def __init__(self, root: tk.Tk, game: Game):
        self.root = root
        self.root.title("tetrisai")
        self.game = game
        self.base_rate = game.tick_rate
        board = game.board

        self.canvas = tk.Canvas(root, width=board.width * CELL_SIZE,
                                height=board.height * CELL_SIZE, bg="#111111")
        self.canvas.pack(side=tk.LEFT)

        panel = tk.Frame(root)
        panel.pack(side=tk.LEFT, fill=tk.Y, padx=8)
        size = game.catalog.max_bounding_size()
        self.preview = tk.Canvas(panel, width=size * CELL_SIZE, height=size * CELL_SIZE, bg="#111111")
        self.preview.pack(pady=5)
        self.info_label = tk.Label(panel, text="", font=("Arial", 12), justify=tk.LEFT)
        self.info_label.pack(pady=5)
        self.status_label = tk.Label(panel, text="", font=("Arial", 12, "bold"))
        self.status_label.pack(pady=5)
        self.start_button = tk.Button(panel, text="Start", command=self.handle_button)
        self.start_button.pack(pady=5)
        self.mode_button = tk.Button(panel, text="Mode: Manual", command=self.toggle_mode)
        self.mode_button.pack(pady=5)

        root.bind("<Key>", self.on_key)
        self.draw()
        self.root.after(TICK_MS, self.run)

    def _cell(self, canvas, x, y, color, outline="#333"):
        canvas.create_rectangle(x * CELL_SIZE, y * CELL_SIZE, (x + 1) * CELL_SIZE,
                                (y + 1) * CELL_SIZE, fill=color, outline=outline)

    def draw(self):
        self.canvas.delete("all")
        board = self.game.board
        for y in range(board.height):
            for x in range(board.width):
                self._cell(self.canvas, x, y, COLORS.get(int(board.grid[y, x]), COLORS[0]))
        if board.shadow:
            for x, y in board.shadow.cells:
                if y >= 0:
                    self._cell(self.canvas, x, y, COLORS['shadow'])
        if board.piece:
            for x, y in board.piece.cells:
                if y >= 0:
                    self._cell(self.canvas, x, y, COLORS[board.piece.shape.tile], outline="#fff")

        self.preview.delete("all")
        if self.game.next_piece:
            shape = self.game.next_piece.shape
            for x, y in shape.cells(0):
                self._cell(self.preview, x, y, COLORS[shape.tile])

        self.info_label.config(text=(
            f"Score: {self.game.score}\nBest: {self.game.best_score}\n"
            f"Lines: {self.game.lines}\nBest lines: {self.game.best_lines}"))
        if self.game.over:
            self.status_label.config(text="Game over")
            self.start_button.config(text="Restart")
        elif self.game.paused:
            self.status_label.config(text="Paused")
            self.start_button.config(text="Resume")
        else:
            self.status_label.config(text="")
            self.start_button.config(text="Pause")

    def handle_button(self):
        if self.game.over:
            self.game.restart()
            self.game.paused = False
        else:
            self.game.pause()
        self.draw()

    def toggle_mode(self):
        self.game.toggle_auto()
        self.mode_button.config(text="Mode: Auto" if self.game.auto else "Mode: Manual")

    def on_key(self, event):
        if event.state & 0x000C:  # Control / Alt held
            return
        if event.keysym in ('p', 'P', 'Escape'):
            self.game.pause()
        elif event.keysym in KEY_COMMANDS:
            self.game.move(KEY_COMMANDS[event.keysym])
        else:
            return
        self.draw()

    def run(self):
        self.game.set_cadence(cadence_for_lines(self.game.lines, self.base_rate))
        self.game.tick()
        self.draw()
        self.root.after(TICK_MS, self.run)


def launch(game: Game):
    root = tk.Tk()
    TetrisUI(root, game)
    root.mainloop()
