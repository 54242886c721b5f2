"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import FollowTarget, OrganisationIdentity, ResolvedItem


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("JOEL-QR", style="bold cyan")
    subtitle = Text("JORFSearch • QR codes • Pasarela WhatsApp/Telegram", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_items_table(items: Iterable[ResolvedItem], *, title: str = "JORFSearch") -> Table:
    table = Table(title=title)
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Prénom", style="cyan")
    table.add_column("Nom", style="white")
    for position, item in enumerate(items, start=1):
        table.add_row(str(position), item.given_name, item.family_name)
    return table


def build_identities_table(identities: Iterable[OrganisationIdentity]) -> Table:
    table = Table(title="Wikidata")
    table.add_column("ID", style="magenta", no_wrap=True)
    table.add_column("Name", style="white")
    for identity in identities:
        table.add_row(identity.id, identity.name)
    return table


def build_target_panel(target: FollowTarget, destination_url: str) -> Panel:
    """Panel con el objetivo resuelto y la URL codificada en el QR."""

    body = Text()
    body.append("Type: ", style="bold")
    body.append(f"{target.type.value}\n")
    body.append("Label: ", style="bold")
    body.append(f"{target.canonical_label}\n")
    body.append("QR URL: ", style="bold")
    body.append(destination_url, style="magenta")
    return Panel(body, title=Text("Follow target", style="bold yellow"), border_style="yellow")
