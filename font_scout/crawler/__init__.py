"""font_scout.crawler: загрузка ресурсов и рекурсивный обход цепочек @import."""
