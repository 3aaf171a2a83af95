"""font_scout.parser: извлечение ссылок из HTML, JS и CSS."""
