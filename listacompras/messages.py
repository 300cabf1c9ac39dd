"""User-facing strings (pt-BR)."""

TITLE = "Lista de Compras"

PLACEHOLDER_NAME = "Nome do produto"
PLACEHOLDER_QUANTITY = "Quantidade"
PLACEHOLDER_PRICE = "Valor"

BUTTON_ADD = "Adicionar Produto"
BUTTON_SAVE = "Salvar Alterações"
BUTTON_EXPORT = "Exportar para Excel"

TOTAL_LABEL = "Total"

INVALID_FORM = "Por favor, preencha todos os campos corretamente."

EMPTY_LIST = "Nenhum produto na lista."
EXPORT_SHARED = "Planilha exportada: {handle}"
EXPORT_FAILED = "Não foi possível exportar a planilha."
