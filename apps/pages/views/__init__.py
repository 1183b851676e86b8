from .pages import AboutView, ArticlesView, ConferencesView, ContactView, FounderView, HomeView

__all__ = ["AboutView", "ArticlesView", "ConferencesView", "ContactView", "FounderView", "HomeView"]
