"""
customtkinter front end for the simulator.

The window only collects input and draws results; every state change goes
through :class:`~cpu_scheduler.simulator.Simulator`:

- Top section: process input (name, arrival, burst, priority) + process list.
- Middle section: algorithm selection + (for RR) time quantum.
- Bottom section: Gantt chart, metrics table and algorithm comparison.
"""

import logging
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Dict, List, Optional, Tuple

import customtkinter as ctk

from .errors import SchedulerError
from .job_table import SCENARIOS
from .metrics import RunSummary, summarize
from .models import Algorithm, Run
from .simulator import Simulator, resolve_quantum
from .timeline import idle_gaps

logger = logging.getLogger(__name__)

NO_SUMMARY = "CPU Utilization: N/A  |  Throughput: N/A  |  Min Waiting: N/A  |  Max Waiting: N/A"


class _ToolTip:
    """Minimal tooltip implementation for Tk / customtkinter widgets."""

    def __init__(self, widget: tk.Widget, text: str) -> None:
        self.widget = widget
        self.text = text
        self._tip_window: Optional[tk.Toplevel] = None
        widget.bind("<Enter>", self._on_enter)
        widget.bind("<Leave>", self._on_leave)

    def _on_enter(self, _event: tk.Event) -> None:
        if self._tip_window is not None:
            return
        x = self.widget.winfo_rootx() + 20
        y = self.widget.winfo_rooty() + self.widget.winfo_height() + 5
        self._tip_window = tw = tk.Toplevel(self.widget)
        tw.wm_overrideredirect(True)
        tw.wm_geometry(f"+{x}+{y}")
        tk.Label(
            tw,
            text=self.text,
            justify="left",
            background="#111827",
            foreground="#F9FAFB",
            relief="solid",
            borderwidth=1,
            font=("Segoe UI", 9),
            padx=4,
            pady=2,
        ).pack(ipadx=1)

    def _on_leave(self, _event: tk.Event) -> None:
        if self._tip_window is not None:
            self._tip_window.destroy()
            self._tip_window = None


class CPUSchedulerApp:
    """customtkinter window for exploring the six scheduling algorithms."""

    def __init__(self, simulator: Optional[Simulator] = None, root: Optional[ctk.CTk] = None) -> None:
        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("dark-blue")

        self.simulator = simulator or Simulator()
        self.root = root or ctk.CTk()
        self.root.title("CPU Scheduling Simulator")
        self.root.geometry("1100x760")

        self._label_to_algorithm: Dict[str, Algorithm] = {a.label: a for a in Algorithm}
        self._algorithm_label_var = ctk.StringVar(value=Algorithm.FCFS.label)
        self._appearance_var = ctk.StringVar(value="Dark")
        self._scenario_var = ctk.StringVar(value="None")

        # Comparison rows -> the run they display.
        self._comparison_runs: Dict[str, Tuple[Run, RunSummary]] = {}
        self._current_run: Optional[Run] = None

        self._configure_treeview_style()
        self._build_ui()

    @property
    def selected_algorithm(self) -> Algorithm:
        return self._label_to_algorithm.get(self._algorithm_label_var.get(), Algorithm.FCFS)

    def _configure_treeview_style(self) -> None:
        """Apply a dark theme to ttk Treeview widgets so they match customtkinter."""
        style = ttk.Style(self.root)
        try:
            style.theme_use("clam")
        except tk.TclError:
            logger.debug("ttk theme 'clam' unavailable, keeping the default theme")

        style.configure(
            "Treeview",
            background="#020617",
            foreground="#E5E7EB",
            fieldbackground="#020617",
            bordercolor="#1F2937",
            borderwidth=1,
            rowheight=22,
        )
        style.map(
            "Treeview",
            background=[("selected", "#1D4ED8")],
            foreground=[("selected", "#F9FAFB")],
        )
        style.configure(
            "Treeview.Heading",
            background="#0F172A",
            foreground="#E5E7EB",
            font=("Segoe UI Semibold", 9),
        )

    def _on_theme_changed(self, mode: str) -> None:
        ctk.set_appearance_mode(mode.lower())
        self._configure_treeview_style()

    # ------------------------------------------------------------------#
    # UI construction                                                   #
    # ------------------------------------------------------------------#

    def _build_ui(self) -> None:
        main_frame = ctk.CTkScrollableFrame(self.root, corner_radius=0, fg_color="transparent")
        main_frame.pack(fill="both", expand=True, padx=16, pady=16)

        header_frame = ctk.CTkFrame(main_frame, fg_color="transparent")
        header_frame.pack(fill="x", pady=(0, 10))

        title_left = ctk.CTkFrame(header_frame, fg_color="transparent")
        title_left.pack(side="left", fill="x", expand=True)
        ctk.CTkLabel(title_left, text="CPU Scheduling Simulator", font=("Segoe UI Semibold", 22)).pack(anchor="w")
        ctk.CTkLabel(
            title_left,
            text="FCFS • SJF • SRTF • Priority • Round Robin • Preemptive Priority",
            font=("Segoe UI", 12),
        ).pack(anchor="w")

        ctk.CTkSegmentedButton(
            header_frame,
            values=["Dark", "Light"],
            variable=self._appearance_var,
            width=140,
            command=self._on_theme_changed,
        ).pack(side="right", padx=(0, 8))

        self._build_process_input_section(main_frame)
        self._build_algorithm_section(main_frame)
        self._build_output_section(main_frame)

    def _make_tree(self, parent: tk.Widget, headings: List[Tuple[str, str]], height: int, width: int = 90) -> ttk.Treeview:
        container = ctk.CTkFrame(parent, fg_color="transparent")
        container.pack(fill="both", expand=True, padx=8, pady=(0, 8))

        tree = ttk.Treeview(container, columns=[col for col, _ in headings], show="headings", height=height)
        for col, label in headings:
            tree.heading(col, text=label)
            tree.column(col, anchor="center", width=width, stretch=True)
        tree.tag_configure("evenrow", background="#020617")
        tree.tag_configure("oddrow", background="#111827")
        tree.pack(side="left", fill="both", expand=True, padx=(4, 0), pady=4)

        scrollbar = ttk.Scrollbar(container, orient="vertical", command=tree.yview)
        tree.configure(yscroll=scrollbar.set)
        scrollbar.pack(side="right", fill="y", padx=(0, 4), pady=4)
        return tree

    def _build_process_input_section(self, parent: ctk.CTkFrame) -> None:
        frame = ctk.CTkFrame(parent, corner_radius=12)
        frame.pack(fill="x", pady=(10, 10))

        ctk.CTkLabel(frame, text="Process Input", font=("Segoe UI Semibold", 13)).pack(
            anchor="w", padx=12, pady=(10, 6)
        )

        row = ctk.CTkFrame(frame, fg_color="transparent")
        row.pack(fill="x", padx=8)

        self.name_entry = self._labelled_entry(row, "Name", "")
        self.arrival_entry = self._labelled_entry(row, "Arrival Time", "0")
        self.burst_entry = self._labelled_entry(row, "Burst Time", "5")
        self.priority_entry = self._labelled_entry(row, "Priority (1-10)", "5")
        _ToolTip(
            self.priority_entry,
            "Lower numeric value = higher priority.\n"
            "Values outside 1-10 are clamped.",
        )

        ctk.CTkButton(row, text="Add Process", width=110, command=self.add_process).pack(side="left", padx=6)
        ctk.CTkButton(
            row,
            text="Delete Selected",
            width=130,
            command=self.remove_selected_process,
            fg_color="#1F2937",
            hover_color="#111827",
        ).pack(side="left", padx=6)
        ctk.CTkButton(row, text="Load Sample", width=110, command=self.load_sample).pack(side="left", padx=6)

        ctk.CTkComboBox(
            row,
            values=["None"] + list(SCENARIOS),
            variable=self._scenario_var,
            width=180,
            state="readonly",
            command=self._on_scenario_selected,
        ).pack(side="left", padx=6)

        self.process_tree = self._make_tree(
            frame,
            [
                ("name", "Process"),
                ("arrival", "Arrival"),
                ("burst", "Burst"),
                ("priority", "Priority"),
                ("start", "Start"),
                ("completion", "Completion"),
                ("turnaround", "Turnaround"),
            ],
            height=8,
        )

    def _labelled_entry(self, parent: ctk.CTkFrame, text: str, default: str) -> ctk.CTkEntry:
        ctk.CTkLabel(parent, text=text).pack(side="left", padx=(6, 4))
        entry = ctk.CTkEntry(parent, width=70)
        entry.insert(0, default)
        entry.pack(side="left", padx=(0, 6))
        return entry

    def _build_algorithm_section(self, parent: ctk.CTkFrame) -> None:
        frame = ctk.CTkFrame(parent, corner_radius=12)
        frame.pack(fill="x", pady=(0, 10))

        ctk.CTkLabel(frame, text="Scheduling Algorithm", font=("Segoe UI Semibold", 13)).grid(
            row=0, column=0, padx=12, pady=10, sticky="w"
        )

        self.algorithm_combobox = ctk.CTkComboBox(
            frame,
            values=list(self._label_to_algorithm),
            variable=self._algorithm_label_var,
            width=320,
            state="readonly",
            command=self._on_algorithm_combobox_change,
        )
        self.algorithm_combobox.grid(row=0, column=1, padx=8, pady=10, sticky="w")

        quantum_label = ctk.CTkLabel(frame, text="Time Quantum")
        quantum_label.grid(row=0, column=2, padx=(20, 4), pady=10, sticky="e")
        self.quantum_entry = ctk.CTkEntry(frame, width=80)
        self.quantum_entry.insert(0, str(self.simulator.config.default_quantum))
        self.quantum_entry.grid(row=0, column=3, padx=(0, 10), pady=10, sticky="w")
        _ToolTip(
            quantum_label,
            "Round Robin only:\n"
            "Each process gets up to this many time units per turn.\n"
            f"Invalid values fall back to {self.simulator.config.default_quantum}.",
        )
        self._on_algorithm_combobox_change(self._algorithm_label_var.get())

        buttons = [
            ("Run Simulation", self.run_simulation, None),
            ("Compare Algorithms", self.run_comparison, None),
            ("Reset", self.reset_simulation, "#1F2937"),
            ("Clear All", self.clear_all, "#1F2937"),
        ]
        for column, (text, command, color) in enumerate(buttons, start=4):
            kwargs = {"fg_color": color, "hover_color": "#111827"} if color else {}
            ctk.CTkButton(frame, text=text, command=command, width=130, **kwargs).grid(
                row=0, column=column, padx=5, pady=10
            )

        averages_frame = ctk.CTkFrame(frame, fg_color="transparent")
        averages_frame.grid(row=1, column=0, columnspan=8, padx=10, pady=(0, 10), sticky="e")

        self.avg_label = ctk.CTkLabel(
            averages_frame,
            text="Average Waiting: N/A  |  Average Turnaround: N/A  |  Average Response: N/A",
            font=("Segoe UI Semibold", 15),
        )
        self.avg_label.pack(anchor="e")
        self.extra_metrics_label = ctk.CTkLabel(averages_frame, text=NO_SUMMARY, font=("Segoe UI", 11))
        self.extra_metrics_label.pack(anchor="e", pady=(4, 0))

        frame.columnconfigure(1, weight=1)

    def _on_algorithm_combobox_change(self, selected_label: str) -> None:
        """Enable the time quantum field only for Round Robin."""
        algorithm = self._label_to_algorithm.get(selected_label, Algorithm.FCFS)
        state = "normal" if algorithm is Algorithm.ROUND_ROBIN else "disabled"
        self.quantum_entry.configure(state=state)

    def _build_output_section(self, parent: ctk.CTkFrame) -> None:
        frame = ctk.CTkFrame(parent, corner_radius=12)
        frame.pack(fill="both", expand=True)

        gantt_frame = ctk.CTkFrame(frame, corner_radius=12)
        gantt_frame.pack(fill="x", padx=10, pady=(10, 0))
        ctk.CTkLabel(gantt_frame, text="Gantt Chart", font=("Segoe UI Semibold", 13)).pack(
            anchor="w", padx=12, pady=(10, 4)
        )
        self.gantt_canvas = tk.Canvas(gantt_frame, height=120, bg="#020617", highlightthickness=0)
        self.gantt_canvas.pack(fill="x", padx=12, pady=(0, 12))

        metrics_frame = ctk.CTkFrame(frame, corner_radius=12)
        metrics_frame.pack(fill="both", expand=True, padx=10, pady=(10, 0))
        ctk.CTkLabel(metrics_frame, text="Process Metrics", font=("Segoe UI Semibold", 13)).pack(
            anchor="w", padx=12, pady=(10, 4)
        )
        self.results_tree = self._make_tree(
            metrics_frame,
            [
                ("name", "Process"),
                ("arrival", "AT"),
                ("burst", "BT"),
                ("completion", "CT"),
                ("turnaround", "TAT"),
                ("waiting", "WT"),
                ("response", "RT"),
            ],
            height=8,
        )

        comparison_frame = ctk.CTkFrame(frame, corner_radius=12)
        comparison_frame.pack(fill="both", expand=True, padx=10, pady=(10, 10))
        ctk.CTkLabel(comparison_frame, text="Algorithm Comparison", font=("Segoe UI Semibold", 13)).pack(
            anchor="w", padx=12, pady=(10, 4)
        )
        self.comparison_tree = self._make_tree(
            comparison_frame,
            [
                ("algorithm", "Algorithm"),
                ("avg_waiting", "Avg Waiting"),
                ("avg_turnaround", "Avg Turnaround"),
                ("avg_response", "Avg Response"),
                ("cpu_util", "CPU Util (%)"),
                ("throughput", "Throughput"),
            ],
            height=6,
            width=120,
        )
        self.comparison_tree.bind("<<TreeviewSelect>>", self._on_comparison_select)

    # ------------------------------------------------------------------#
    # Process list operations                                           #
    # ------------------------------------------------------------------#

    def add_process(self) -> None:
        """Add a process from the entry fields; the simulator validates it."""
        try:
            arrival = int(self.arrival_entry.get().strip())
            burst = int(self.burst_entry.get().strip())
            priority = int(self.priority_entry.get().strip() or "5")
        except ValueError:
            messagebox.showerror("Invalid input", "Arrival, burst and priority must be integers.")
            return

        try:
            self.simulator.add_process(self.name_entry.get(), arrival, burst, priority)
        except SchedulerError as exc:
            messagebox.showerror("Invalid input", str(exc))
            return

        self.name_entry.delete(0, tk.END)
        self._refresh_process_tree()

    def remove_selected_process(self) -> None:
        selection = self.process_tree.selection()
        if not selection:
            messagebox.showinfo("Delete process", "Please select a process to delete!")
            return
        try:
            self.simulator.delete_process(self.process_tree.index(selection[0]))
        except SchedulerError as exc:
            messagebox.showerror("Delete process", str(exc))
            return
        self._clear_results()
        self._refresh_process_tree()

    def load_sample(self) -> None:
        self.simulator.load_sample_set()
        self._clear_results()
        self._refresh_process_tree()

    def _on_scenario_selected(self, selected_label: str) -> None:
        if selected_label == "None":
            return
        self.simulator.load_scenario(selected_label)
        self._clear_results()
        self._refresh_process_tree()

    def clear_all(self) -> None:
        """Remove every process and all results."""
        self.simulator.clear()
        self._clear_results()
        self._refresh_process_tree()

    def _refresh_process_tree(self) -> None:
        for item in self.process_tree.get_children():
            self.process_tree.delete(item)
        for index, p in enumerate(self.simulator.table):
            self.process_tree.insert(
                "",
                "end",
                values=(
                    p.name,
                    p.arrival_time,
                    p.burst_time,
                    p.priority,
                    p.start_time,
                    p.completion_time,
                    p.turnaround_time,
                ),
                tags=("evenrow" if index % 2 == 0 else "oddrow",),
            )

    # ------------------------------------------------------------------#
    # Simulation + visualization                                       #
    # ------------------------------------------------------------------#

    def _quantum_text(self) -> str:
        """Read the quantum field, writing back the value the simulator will use."""
        text = self.quantum_entry.get().strip()
        effective = resolve_quantum(text, self.simulator.config.default_quantum)
        if text != str(effective):
            # A disabled entry ignores edits; that is fine outside Round Robin.
            self.quantum_entry.delete(0, tk.END)
            self.quantum_entry.insert(0, str(effective))
        return text

    def run_simulation(self) -> None:
        """Run the selected scheduling algorithm and update the GUI."""
        try:
            run = self.simulator.run(self.selected_algorithm, self._quantum_text())
        except SchedulerError as exc:
            messagebox.showerror("Error", str(exc))
            return
        self._refresh_process_tree()
        self._show_run(run, summarize(run))

    def reset_simulation(self) -> None:
        self.simulator.reset()
        self._clear_results()
        self._refresh_process_tree()

    def run_comparison(self) -> None:
        """Run all algorithms on the current process set and fill the comparison table."""
        try:
            results = self.simulator.compare(self._quantum_text())
        except SchedulerError as exc:
            messagebox.showerror("Error", str(exc))
            return

        self._clear_comparison()
        for run, summary in results:
            item_id = self.comparison_tree.insert(
                "",
                "end",
                values=(
                    run.algorithm.label,
                    f"{summary.avg_waiting:.2f}",
                    f"{summary.avg_turnaround:.2f}",
                    f"{summary.avg_response:.2f}",
                    f"{summary.cpu_utilization * 100:.2f}",
                    f"{summary.throughput:.3f}",
                ),
            )
            self._comparison_runs[item_id] = (run, summary)

    def _on_comparison_select(self, _event: tk.Event) -> None:
        """Show the Gantt chart and metrics of the selected comparison row."""
        selection = self.comparison_tree.selection()
        if selection and selection[0] in self._comparison_runs:
            self._show_run(*self._comparison_runs[selection[0]])

    def _show_run(self, run: Run, summary: RunSummary) -> None:
        self._current_run = run

        for item in self.results_tree.get_children():
            self.results_tree.delete(item)
        for index, p in enumerate(run.processes):
            self.results_tree.insert(
                "",
                "end",
                values=(
                    p.name,
                    p.arrival_time,
                    p.burst_time,
                    p.completion_time,
                    p.turnaround_time,
                    p.waiting_time,
                    p.response_time,
                ),
                tags=("evenrow" if index % 2 == 0 else "oddrow",),
            )

        self.avg_label.configure(
            text=(
                f"Average Waiting: {summary.avg_waiting:.2f}  |  "
                f"Average Turnaround: {summary.avg_turnaround:.2f}  |  "
                f"Average Response: {summary.avg_response:.2f}"
            )
        )
        self.extra_metrics_label.configure(
            text=(
                f"CPU Utilization: {summary.cpu_utilization * 100:.2f}%  |  "
                f"Throughput: {summary.throughput:.3f} proc/unit  |  "
                f"Min Waiting: {summary.min_waiting}  |  "
                f"Max Waiting: {summary.max_waiting}"
            )
        )
        self._draw_gantt_chart(run)

    def _clear_comparison(self) -> None:
        self._comparison_runs.clear()
        for item in self.comparison_tree.get_children():
            self.comparison_tree.delete(item)

    def _clear_results(self) -> None:
        self._current_run = None
        for item in self.results_tree.get_children():
            self.results_tree.delete(item)
        self._clear_comparison()
        self.gantt_canvas.delete("all")
        self.avg_label.configure(
            text="Average Waiting: N/A  |  Average Turnaround: N/A  |  Average Response: N/A"
        )
        self.extra_metrics_label.configure(text=NO_SUMMARY)

    def _draw_gantt_chart(self, run: Run) -> None:
        """
        Draw the run's timeline on the canvas.

        Each block is a rectangle whose width is proportional to its
        duration, filled with the process color; idle gaps are gray.
        """
        self.gantt_canvas.delete("all")

        total_time = run.clock
        if not run.timeline or total_time <= 0:
            self.gantt_canvas.create_text(
                10, 10, anchor="nw", text="No schedule to display.", fill="#E5E7EB", font=("Segoe UI", 10)
            )
            return

        canvas_width = int(self.gantt_canvas.winfo_width())
        if canvas_width <= 1:
            # Canvas not laid out yet.
            canvas_width = 800

        left_margin = 20
        right_margin = 20
        bar_top = 20
        bar_bottom = bar_top + 50
        time_scale = max(1, canvas_width - left_margin - right_margin) / float(total_time)
        tick_font = ("Segoe UI", 8)

        segments = [(start, end, "Idle", "#4B5563") for start, end in idle_gaps(run.timeline)]
        segments += [(b.start_time, b.end_time, b.name, b.color) for b in run.timeline]

        for start, end, label, fill_color in sorted(segments):
            x1 = left_margin + start * time_scale
            x2 = left_margin + end * time_scale
            self.gantt_canvas.create_rectangle(x1, bar_top, x2, bar_bottom, fill=fill_color, outline="#111827")
            self.gantt_canvas.create_text(
                (x1 + x2) / 2, (bar_top + bar_bottom) / 2, text=label, font=("Segoe UI", 9), fill="#F9FAFB"
            )
            self.gantt_canvas.create_line(x1, bar_bottom, x1, bar_bottom + 5, fill="#4B5563")
            self.gantt_canvas.create_text(
                x1, bar_bottom + 7, text=str(start), anchor="n", font=tick_font, fill="#D1D5DB"
            )

        final_x = left_margin + total_time * time_scale
        self.gantt_canvas.create_line(final_x, bar_bottom, final_x, bar_bottom + 5, fill="#4B5563")
        self.gantt_canvas.create_text(
            final_x, bar_bottom + 7, text=str(total_time), anchor="n", font=tick_font, fill="#D1D5DB"
        )

    def run(self) -> None:
        """Start the Tkinter main event loop."""
        self.root.mainloop()


def main(simulator: Optional[Simulator] = None) -> None:
    CPUSchedulerApp(simulator).run()
