# Parkslot — parking slot allocation & compatibility engine
