"""Query sets and dialects for individual database products; importing one registers it."""