# mdrowser/export.py

"""
Сохранение показанного markdown в файл.
"""
from pathlib import Path
from typing import Sequence, Union


def save_markdown(lines: Sequence[str], output_path: Union[Path, str]) -> Path:
    """
    Сохраняет строки lines в UTF-8 файл по указанному пути.

    :param lines: строки markdown, как они показаны во вьювере
    :param output_path: путь к файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from mdrowser.export import save_markdown
    path = save_markdown(["# Title", "body"], "pages/example.md")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return output
