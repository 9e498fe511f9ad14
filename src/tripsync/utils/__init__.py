"""Pure helpers: money arithmetic, balances, payment links, invite codes."""
