"""
Spigot Errors — иерархия исключений ядра

Две категории отказов:
1. Исчерпание ресурсов: state vector не может расти дальше
   (достигнут max_terms / max_passes или реальный MemoryError при append)
2. Нарушение инварианта: remainder вне [0, k], digit вне [0, 9],
   невозможный carry. Это дефект реализации, а не recoverable condition.

Пользовательского ввода в ядре нет, поэтому других категорий нет.
"""


class SpigotError(Exception):
    """Базовое исключение spigot-ядра."""
    pass


class SpigotResourceExhausted(SpigotError, MemoryError):
    """
    State vector не может расти дальше, или исчерпан лимит проходов.

    Состояние движка при этом не меняется: рост вектора строится на копии,
    и при MemoryError частично нормализованная копия отбрасывается. Уже
    закоммиченные цифры остаются доступными, неверная цифра никогда не
    выдаётся. Условие липкое: каждый следующий шаг движка снова поднимает
    это исключение.
    Наследует MemoryError, чтобы вызывающий код мог обрабатывать его как
    allocation failure.
    """
    pass


class SpigotInvariantViolation(SpigotError):
    """
    Критическое нарушение внутренней согласованности.

    Корректность алгоритма целиком держится на инвариантах
    0 <= r[k] <= k и "carry не трогает закоммиченные цифры".
    Исключение фатальное: внутри пакета никогда не перехватывается.
    """
    pass
