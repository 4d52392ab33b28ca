import logging
from fractions import Fraction

import flet as ft

import tabla
from algoritmo import (
    DEFAULT_MAX_STEPS,
    RESOLUTION_CYCLE,
    RESOLUTION_INCOMPATIBLE,
    RESOLUTION_NO,
    RESOLUTION_SOLVED,
    RESOLUTION_STALLED,
    RESOLUTION_UNBOUNDED,
    linsolve,
)
from errores import SimplexError
from restricciones import GTE, LT, LTE, GT, EQ, ConstraintBuilder

logger = logging.getLogger(__name__)

MESSAGES = {
    RESOLUTION_UNBOUNDED: "❌ El problema no está acotado (solución infinita)",
    RESOLUTION_INCOMPATIBLE: "❌ El problema no tiene solución factible",
    RESOLUTION_STALLED: "❌ El tableau no es factible ni en el primal ni en el dual",
    RESOLUTION_CYCLE: "⚠️ Se detectó un ciclo: el simplex volvió a una base ya visitada",
    RESOLUTION_NO: "⚠️ Se alcanzó el número máximo de iteraciones",
}


def parse_number(text):
    """Integer or fraction ("3", "-7/2") typed in a field."""
    text = text.strip()
    if not text:
        raise ValueError("campo vacío")
    return Fraction(text)


def build_problem(objective, restrictions, maximize=True):
    """Builder for ``objective`` (one coefficient per variable) under
    ``restrictions``, a list of (coefficients, relation, rhs).

    The solver always maximizes, so a minimization negates the objective.
    """
    builder = ConstraintBuilder()
    for coefficients, relation, rhs in restrictions:
        builder.add_constraint(coefficients, rhs, relation)
    c = list(objective) if maximize else [-ci for ci in objective]
    builder.set_objective(c + [0])
    return builder


def describe_result(resolution, solution, solver, maximize=True, dual=False):
    if resolution != RESOLUTION_SOLVED:
        return MESSAGES.get(resolution, "❌ No se pudo resolver el problema")

    # the dual problem's optimum is minus the primal one
    optimal_value = solver.objective_value()
    if dual:
        optimal_value = -optimal_value
    if not maximize:
        optimal_value = -optimal_value

    text = "✅ Solución óptima encontrada:\n\n"
    for i, value in enumerate(solution):
        text += f"x{i+1} = {value}\n"
    text += f"\nValor óptimo Z = {optimal_value}"
    return text


def panel(title, controls, bgcolor, border_color, border_width=2):
    """Bordered box holding ``controls`` under an optional bold title."""
    if title is not None:
        controls = [ft.Text(title, size=18, weight=ft.FontWeight.BOLD)] + list(controls)
    return ft.Container(
        content=ft.Column(controls),
        bgcolor=bgcolor, padding=15, border_radius=10,
        border=ft.border.all(border_width, border_color)
    )


def button(text, on_click, bgcolor, icon=None, **kwargs):
    return ft.ElevatedButton(text, on_click=on_click, icon=icon,
                             bgcolor=bgcolor, color=ft.Colors.WHITE, **kwargs)


def divider():
    return ft.Divider(height=20, color=ft.Colors.GREY_400)


def main(page: ft.Page):
    page.title = "Método Simplex - Aritmética exacta"
    page.scroll = "adaptive"
    page.padding = 20
    page.theme_mode = ft.ThemeMode.LIGHT

    num_restrictions = 2
    restriction_rows = []
    result_text = ft.Text("", size=14, weight=ft.FontWeight.BOLD)
    iterations_column = ft.Column([], scroll="auto")

    c1_field = ft.TextField(label="Coeficiente x₁", value="3", width=120)
    c2_field = ft.TextField(label="Coeficiente x₂", value="5", width=120)

    opt_type = ft.RadioGroup(
        content=ft.Row([
            ft.Radio(value="max", label="Maximizar"),
            ft.Radio(value="min", label="Minimizar")
        ]),
        value="max"
    )
    dual_check = ft.Checkbox(label="Resolver por el problema dual", value=False)
    steps_field = ft.TextField(label="Iteraciones máx.", value=str(DEFAULT_MAX_STEPS), width=140)

    def create_restriction_row(index, defaults=None):
        default_a1 = defaults[0] if defaults else ("1" if index == 0 else "3")
        default_a2 = defaults[1] if defaults else ("0" if index == 0 else "2")
        default_comp = defaults[2] if defaults else LTE
        default_b = defaults[3] if defaults else ("4" if index == 0 else "18")

        a1 = ft.TextField(label="x₁", value=str(default_a1), width=100)
        a2 = ft.TextField(label="x₂", value=str(default_a2), width=100)
        comp = ft.Dropdown(
            label="", width=80, value=default_comp,
            options=[ft.dropdown.Option(r) for r in (LT, LTE, GT, GTE, EQ)]
        )
        b = ft.TextField(label="b", value=str(default_b), width=100)

        row = ft.Row([
            ft.Text(f"R{index + 1}:", size=16, weight=ft.FontWeight.BOLD),
            a1, ft.Text("x₁ +", size=16), a2, ft.Text("x₂", size=16), comp, b
        ])
        return row, (a1, a2, comp, b)

    restrictions_container = ft.Column([])

    def update_restrictions():
        current_values = [(a1.value, a2.value, comp.value, b.value)
                          for a1, a2, comp, b in restriction_rows]

        restriction_rows.clear()
        restrictions_container.controls.clear()

        for i in range(num_restrictions):
            defaults = current_values[i] if i < len(current_values) else None
            row, fields = create_restriction_row(i, defaults)
            restrictions_container.controls.append(row)
            restriction_rows.append(fields)
        page.update()

    def add_restriction(e):
        nonlocal num_restrictions
        num_restrictions += 1
        update_restrictions()

    def remove_restriction(e):
        nonlocal num_restrictions
        if num_restrictions > 1:
            num_restrictions -= 1
            update_restrictions()

    def show_iterations(solver):
        iterations_column.controls.append(
            ft.Text("📊 Iteraciones del Simplex:", size=16, weight=ft.FontWeight.BOLD)
        )
        for idx, iteration in enumerate(solver.iterations):
            title = f"\nIteración {idx}:"
            if idx > 0:
                pivot = solver.history[idx - 1]
                title += (f" paso {pivot['mode']}, entra x{pivot['entering'] + 1},"
                          f" sale x{pivot['leaving'] + 1}")
            iterations_column.controls.append(ft.Text(title, weight=ft.FontWeight.BOLD))
            tableau_str = tabla.format_table(iteration['rows'], iteration['objective'], iteration['basis'])
            iterations_column.controls.append(
                panel(None, [ft.Text(tableau_str, font_family="Courier New", size=12)],
                      ft.Colors.GREY_100, ft.Colors.GREY_400, border_width=1)
            )

    def solve_simplex(e):
        iterations_column.controls.clear()
        try:
            objective = [parse_number(c1_field.value), parse_number(c2_field.value)]
            restrictions = [
                ([parse_number(a1.value), parse_number(a2.value)], comp.value, parse_number(b.value))
                for a1, a2, comp, b in restriction_rows
            ]
            maximize = opt_type.value == "max"
            dual = bool(dual_check.value)

            builder = build_problem(objective, restrictions, maximize)
            resolution, solution, solver = linsolve(builder, max_steps=int(steps_field.value), dual=dual)

            result_text.value = describe_result(resolution, solution, solver, maximize, dual)
            result_text.color = ft.Colors.GREEN_900 if resolution == RESOLUTION_SOLVED else ft.Colors.RED
            show_iterations(solver)
        except ValueError as ve:
            result_text.value = f"❌ Error: Ingrese valores numéricos válidos\n{ve}"
            result_text.color = ft.Colors.RED
            iterations_column.controls.clear()
        except SimplexError as ex:
            logger.exception("tableau inválido")
            result_text.value = f"❌ Error: {ex}"
            result_text.color = ft.Colors.RED
            iterations_column.controls.clear()
        page.update()

    update_restrictions()

    page.add(
        ft.Container(
            content=ft.Column([
                ft.Text("🎯 Método Simplex Exacto",
                        size=28, weight=ft.FontWeight.BOLD, color=ft.Colors.BLUE_900),
                divider(),
                panel("Función Objetivo:", [
                    ft.Row([ft.Text("Z =", size=16), c1_field, ft.Text("x₁ +", size=16),
                            c2_field, ft.Text("x₂", size=16)]),
                    opt_type,
                ], ft.Colors.BLUE_50, ft.Colors.BLUE_200),
                divider(),
                panel("Restricciones:", [
                    restrictions_container,
                    ft.Row([
                        button("➕ Agregar restricción", add_restriction, ft.Colors.GREEN_400, ft.Icons.ADD),
                        button("➖ Quitar restricción", remove_restriction, ft.Colors.RED_400, ft.Icons.REMOVE),
                    ]),
                ], ft.Colors.AMBER_50, ft.Colors.AMBER_200),
                divider(),
                ft.Row([dual_check, steps_field]),
                button("🚀 Resolver", solve_simplex, ft.Colors.BLUE_700, height=50, width=200),
                divider(),
                panel(None, [result_text], ft.Colors.GREEN_50, ft.Colors.GREEN_200),
                iterations_column,
            ], scroll="auto"),
            padding=20
        )
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    ft.app(target=main)
